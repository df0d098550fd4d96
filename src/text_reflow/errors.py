"""Run failures, each naming the file it was raised for."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class ReflowError(RuntimeError):
    """Base error for a failed reflow run."""


class InputReadError(ReflowError):
    """Input file could not be opened or read."""

    def __init__(self, source: Path, cause: OSError) -> None:
        super().__init__(f"Failed to read {source}: {cause}")
        self.source = source
        self.cause = cause


class OutputWriteError(ReflowError):
    """Formatted output could not be persisted."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Failed to write {path}: {cause}")
        self.path = path
        self.cause = cause


class WorkerTimeoutError(ReflowError):
    """No worker produced a result within the collector timeout."""

    def __init__(self, pending: Iterable[Path], timeout_seconds: float) -> None:
        self.pending = tuple(pending)
        names = ", ".join(str(path) for path in self.pending) or "<none>"
        super().__init__(
            f"No result within {timeout_seconds:g}s; still waiting for: {names}",
        )
        self.timeout_seconds = timeout_seconds
