"""Runtime configuration for the reflow run."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePath

DEFAULT_LINE_WIDTH = 70
DEFAULT_OUTPUT_SUFFIX = ".txt"

# Largest first, so the smallest text is submitted last yet written first.
DEFAULT_INPUTS: tuple[str, ...] = (
    "at_the_mountains_of_madness.txt",
    "the_shadow_over_innsmouth.txt",
    "the_call_of_cthulhu.txt",
)


@dataclass(slots=True)
class Settings:
    """Where to read from, where to write to, and how to wrap."""

    input_dir: Path = Path("assets")
    output_dir: Path = Path("tmp")
    inputs: tuple[str, ...] = DEFAULT_INPUTS
    line_width: int = DEFAULT_LINE_WIDTH
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX
    timeout_seconds: float | None = None

    @classmethod
    def from_env(  # noqa: PLR0913
        cls,
        *,
        input_dir: Path | None = None,
        output_dir: Path | None = None,
        inputs: tuple[str, ...] = (),
        line_width: int | None = None,
        output_suffix: str | None = None,
        timeout_seconds: float | None = None,
    ) -> Settings:
        """Load settings from environment; explicit arguments take precedence."""

        return cls(
            input_dir=input_dir or Path(os.getenv("TEXT_REFLOW_INPUT_DIR", "assets")),
            output_dir=output_dir or Path(os.getenv("TEXT_REFLOW_OUTPUT_DIR", "tmp")),
            inputs=inputs or _collect_inputs(),
            line_width=(
                line_width
                if line_width is not None
                else _env_int("TEXT_REFLOW_LINE_WIDTH", DEFAULT_LINE_WIDTH)
            ),
            output_suffix=(
                output_suffix
                if output_suffix is not None
                else os.getenv("TEXT_REFLOW_OUTPUT_SUFFIX", DEFAULT_OUTPUT_SUFFIX)
            ),
            timeout_seconds=(
                timeout_seconds
                if timeout_seconds is not None
                else _env_optional_float("TEXT_REFLOW_TIMEOUT_SECONDS")
            ),
        )

    def validate(self) -> None:
        """Raise configuration error if any setting is unusable."""

        if self.line_width <= 0:
            raise ValueError("TEXT_REFLOW_LINE_WIDTH must be a positive integer.")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("TEXT_REFLOW_TIMEOUT_SECONDS must be > 0.")
        if "/" in self.output_suffix or "\\" in self.output_suffix:
            raise ValueError(
                f"TEXT_REFLOW_OUTPUT_SUFFIX must not contain a path separator: "
                f"{self.output_suffix!r}",
            )
        for name in self.inputs:
            _validate_input_name(name)


def _collect_inputs() -> tuple[str, ...]:
    raw = os.getenv("TEXT_REFLOW_INPUTS", "").strip()
    if not raw:
        return DEFAULT_INPUTS
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _validate_input_name(name: str) -> None:
    path = PurePath(name)
    if path.is_absolute() or ".." in path.parts:
        raise ValueError(
            f"Input must be a path relative to the input directory: {name!r}",
        )
    if not path.parts:
        raise ValueError("Input path must not be empty.")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as error:
        raise ValueError(f"Invalid {name} value: {raw!r}") from error


def _env_optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as error:
        raise ValueError(f"Invalid {name} value: {raw!r}") from error
