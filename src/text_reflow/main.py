"""CLI entrypoint for text-reflow."""

import logging
from collections.abc import Iterable
from pathlib import Path

import rich_click as click
from rich.logging import RichHandler

from text_reflow import __version__
from text_reflow.controllers import ReflowCliController, ReflowRunCommand
from text_reflow.errors import ReflowError

click.rich_click.USE_MARKDOWN = True
REFLOW_CONTROLLER = ReflowCliController()


@click.group()
@click.version_option(version=__version__, prog_name="text-reflow")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log verbosity for worker and writer diagnostics.",
)
def text_reflow(log_level: str) -> None:
    """Reflow text files to a fixed line width, one worker per file."""

    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@text_reflow.command("run")
@click.argument("inputs", nargs=-1)
@click.option(
    "--input-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory the inputs are resolved against. Defaults to TEXT_REFLOW_INPUT_DIR or assets.",
)
@click.option(
    "--output-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory for formatted files. Defaults to TEXT_REFLOW_OUTPUT_DIR or tmp.",
)
@click.option(
    "--width",
    type=click.IntRange(min=1),
    default=None,
    help="Line width in bytes. Defaults to TEXT_REFLOW_LINE_WIDTH or 70.",
)
@click.option(
    "--suffix",
    default=None,
    help="Output file suffix. Defaults to TEXT_REFLOW_OUTPUT_SUFFIX or .txt.",
)
@click.option(
    "--timeout",
    "timeout_seconds",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help=(
        "Fail if no further worker finishes within this many seconds of the previous "
        "result. Waits forever by default."
    ),
)
def run(  # noqa: PLR0913
    inputs: tuple[str, ...],
    input_dir: Path | None,
    output_dir: Path | None,
    width: int | None,
    suffix: str | None,
    timeout_seconds: float | None,
) -> None:
    """Format INPUTS concurrently and write each as `<length><suffix>`.

    Without INPUTS the configured default texts are processed.
    """

    try:
        _emit_lines(
            REFLOW_CONTROLLER.run(
                ReflowRunCommand(
                    inputs=inputs,
                    input_dir=input_dir,
                    output_dir=output_dir,
                    line_width=width,
                    output_suffix=suffix,
                    timeout_seconds=timeout_seconds,
                ),
            ),
        )
    except (ReflowError, ValueError) as error:
        raise click.ClickException(str(error)) from error


def _emit_lines(lines: Iterable[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    text_reflow()
