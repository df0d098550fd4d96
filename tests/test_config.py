from __future__ import annotations

import inspect
from pathlib import Path

import allure
import pytest

from text_reflow import dispatch, formatting
from text_reflow.config import DEFAULT_INPUTS, Settings

pytestmark = [
    allure.epic("Text Reflow"),
    allure.feature("Configuration"),
]


def test_from_env_uses_defaults_without_environment() -> None:
    settings = Settings.from_env()

    assert settings == Settings()
    assert settings.inputs == DEFAULT_INPUTS
    assert settings.input_dir == Path("assets")
    assert settings.output_dir == Path("tmp")
    assert settings.line_width == 70
    assert settings.output_suffix == ".txt"
    assert settings.timeout_seconds is None


def test_from_env_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEXT_REFLOW_INPUT_DIR", "texts")
    monkeypatch.setenv("TEXT_REFLOW_OUTPUT_DIR", "wrapped")
    monkeypatch.setenv("TEXT_REFLOW_INPUTS", " a.txt, ,nested/b.txt ")
    monkeypatch.setenv("TEXT_REFLOW_LINE_WIDTH", "42")
    monkeypatch.setenv("TEXT_REFLOW_OUTPUT_SUFFIX", ".out")
    monkeypatch.setenv("TEXT_REFLOW_TIMEOUT_SECONDS", "2.5")

    settings = Settings.from_env()

    assert settings.input_dir == Path("texts")
    assert settings.output_dir == Path("wrapped")
    assert settings.inputs == ("a.txt", "nested/b.txt")
    assert settings.line_width == 42
    assert settings.output_suffix == ".out"
    assert settings.timeout_seconds == 2.5


def test_from_env_explicit_arguments_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEXT_REFLOW_INPUTS", "env.txt")
    monkeypatch.setenv("TEXT_REFLOW_LINE_WIDTH", "42")
    monkeypatch.setenv("TEXT_REFLOW_OUTPUT_SUFFIX", ".out")

    settings = Settings.from_env(inputs=("cli.txt",), line_width=10, output_suffix="")

    assert settings.inputs == ("cli.txt",)
    assert settings.line_width == 10
    assert settings.output_suffix == ""


def test_from_env_rejects_non_numeric_width(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEXT_REFLOW_LINE_WIDTH", "wide")

    with pytest.raises(ValueError, match="TEXT_REFLOW_LINE_WIDTH"):
        Settings.from_env()


def test_validate_accepts_defaults() -> None:
    Settings().validate()


def test_validate_rejects_non_positive_width() -> None:
    with pytest.raises(ValueError, match="TEXT_REFLOW_LINE_WIDTH"):
        Settings(line_width=0).validate()


def test_validate_rejects_non_positive_timeout() -> None:
    with pytest.raises(ValueError, match="TEXT_REFLOW_TIMEOUT_SECONDS"):
        Settings(timeout_seconds=0).validate()


def test_validate_rejects_suffix_with_separator() -> None:
    with pytest.raises(ValueError, match="TEXT_REFLOW_OUTPUT_SUFFIX"):
        Settings(output_suffix="/x.txt").validate()


@pytest.mark.parametrize("name", ["/etc/passwd", "../outside.txt", "a/../../b.txt", ""])
def test_validate_rejects_inputs_outside_input_dir(name: str) -> None:
    with pytest.raises(ValueError, match="Input"):
        Settings(inputs=(name,)).validate()


def test_validate_accepts_nested_relative_input() -> None:
    Settings(inputs=("nested/dir/file.txt",)).validate()


def test_pipeline_defaults_come_from_settings() -> None:
    settings = Settings()
    run_defaults = inspect.signature(dispatch.run).parameters

    assert run_defaults["width"].default == settings.line_width
    assert run_defaults["suffix"].default == settings.output_suffix
    assert inspect.signature(formatting.format_text).parameters["width"].default == 70
