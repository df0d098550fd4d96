"""Controller for the reflow CLI command."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from text_reflow.config import Settings
from text_reflow.dispatch import RunResult, iter_run

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReflowRunCommand:
    """CLI inputs for the run command."""

    inputs: tuple[str, ...] = ()
    input_dir: Path | None = None
    output_dir: Path | None = None
    line_width: int | None = None
    output_suffix: str | None = None
    timeout_seconds: float | None = None


class ReflowCliController:
    """Coordinates reflow command execution."""

    def run(self, command: ReflowRunCommand) -> Iterator[str]:
        """Reflow every input, yielding one line per written file."""

        settings = Settings.from_env(
            input_dir=command.input_dir,
            output_dir=command.output_dir,
            inputs=command.inputs,
            line_width=command.line_width,
            output_suffix=command.output_suffix,
            timeout_seconds=command.timeout_seconds,
        )
        settings.validate()
        settings.output_dir.mkdir(parents=True, exist_ok=True)
        logger.info(
            "Reflowing %d file(s) from %s into %s",
            len(settings.inputs),
            settings.input_dir,
            settings.output_dir,
        )

        result = RunResult()
        for report in iter_run(
            settings.inputs,
            input_dir=settings.input_dir,
            output_dir=settings.output_dir,
            width=settings.line_width,
            suffix=settings.output_suffix,
            timeout_seconds=settings.timeout_seconds,
        ):
            result.reports.append(report)
            yield f"Writing file of length: {report.size}"

        yield f"Done: {result.files_written} file(s), {result.bytes_written} bytes written."
