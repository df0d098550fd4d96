"""Shared test fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def clean_reflow_env(monkeypatch):
    """Keep TEXT_REFLOW_* variables from the host out of every test."""
    for name in list(os.environ):
        if name.startswith("TEXT_REFLOW_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def input_dir(tmp_path: Path) -> Path:
    path = tmp_path / "assets"
    path.mkdir()
    return path


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path
