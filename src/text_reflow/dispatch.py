"""Fan-out/fan-in dispatcher: one worker thread per input, one collector.

Every worker reads and formats a single file, then puts exactly one item on
a shared completion queue: the formatted text, or the error that stopped it.
The collector drains the queue once per input and writes results in the
order workers finish, not the order inputs were given. Output files are
named after the byte length of their content, so two results of equal
length land on the same path and the later write wins.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import closing
from dataclasses import dataclass, field
from pathlib import Path

from text_reflow.config import DEFAULT_LINE_WIDTH, DEFAULT_OUTPUT_SUFFIX
from text_reflow.errors import OutputWriteError, WorkerTimeoutError
from text_reflow.formatting import read_and_format

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class FormattedText:
    """Formatted contents of one input file."""

    source: Path
    content: bytes


@dataclass(slots=True, frozen=True)
class WriteReport:
    """One persisted output file."""

    source: Path
    path: Path
    size: int


@dataclass(slots=True)
class RunResult:
    """Write reports in completion order."""

    reports: list[WriteReport] = field(default_factory=list)

    @property
    def files_written(self) -> int:
        return len(self.reports)

    @property
    def bytes_written(self) -> int:
        return sum(report.size for report in self.reports)


@dataclass(slots=True, frozen=True)
class _WorkerFailure:
    source: Path
    error: Exception


_CompletionQueue = queue.Queue[FormattedText | _WorkerFailure]


def run(  # noqa: PLR0913
    inputs: Sequence[str | Path],
    *,
    input_dir: Path,
    output_dir: Path,
    width: int = DEFAULT_LINE_WIDTH,
    suffix: str = DEFAULT_OUTPUT_SUFFIX,
    timeout_seconds: float | None = None,
    on_written: Callable[[WriteReport], None] | None = None,
) -> RunResult:
    """Format every input concurrently and write each result as it completes.

    Any read or write failure aborts the run with the error that caused it;
    outputs written before the failure are left in place.
    """

    result = RunResult()
    for report in iter_run(
        inputs,
        input_dir=input_dir,
        output_dir=output_dir,
        width=width,
        suffix=suffix,
        timeout_seconds=timeout_seconds,
    ):
        result.reports.append(report)
        if on_written is not None:
            on_written(report)
    return result


def iter_run(  # noqa: PLR0913
    inputs: Sequence[str | Path],
    *,
    input_dir: Path,
    output_dir: Path,
    width: int = DEFAULT_LINE_WIDTH,
    suffix: str = DEFAULT_OUTPUT_SUFFIX,
    timeout_seconds: float | None = None,
) -> Iterator[WriteReport]:
    """Yield a write report for every input, in completion order."""

    completed = iter_completed(
        inputs,
        input_dir=input_dir,
        width=width,
        timeout_seconds=timeout_seconds,
    )
    with closing(completed):
        for item in completed:
            yield write_formatted(item, output_dir, suffix)


def iter_completed(
    inputs: Sequence[str | Path],
    *,
    input_dir: Path,
    width: int = DEFAULT_LINE_WIDTH,
    timeout_seconds: float | None = None,
) -> Iterator[FormattedText]:
    """Start one worker per input and yield formatted texts as they arrive.

    The queue is sized to the number of inputs, so workers never wait to
    enqueue. Exactly ``len(inputs)`` items are dequeued. A dequeued worker
    error is re-raised at once. With ``timeout_seconds`` set, a dequeue that
    waits longer raises :class:`WorkerTimeoutError` naming the inputs still
    outstanding. Workers are joined once every item has been dequeued; on
    any failure, or when the generator is closed early, the error surfaces
    without waiting on the remaining daemon workers.
    """

    sources = [Path(input_dir) / spec for spec in inputs]
    completed: _CompletionQueue = queue.Queue(maxsize=len(sources))
    workers = [
        threading.Thread(
            target=_format_worker,
            args=(source, width, completed),
            name=f"reflow-worker-{index}",
            daemon=True,
        )
        for index, source in enumerate(sources)
    ]
    for worker in workers:
        worker.start()
    logger.debug("Started %d worker(s)", len(workers))

    pending = list(sources)
    drained = False
    try:
        for _ in range(len(sources)):
            try:
                item = completed.get(timeout=timeout_seconds)
            except queue.Empty:
                raise WorkerTimeoutError(pending, timeout_seconds or 0.0) from None
            pending.remove(item.source)
            if isinstance(item, _WorkerFailure):
                logger.warning("Worker for %s failed: %s", item.source, item.error)
                raise item.error
            yield item
        drained = True
    finally:
        if drained:
            _join_workers(workers)
        else:
            _abandon_workers(workers)


def write_formatted(
    item: FormattedText,
    output_dir: Path,
    suffix: str = DEFAULT_OUTPUT_SUFFIX,
) -> WriteReport:
    """Persist formatted text under a name derived from its byte length."""

    size = len(item.content)
    path = Path(output_dir) / f"{size}{suffix}"
    try:
        path.write_bytes(item.content)
    except OSError as error:
        raise OutputWriteError(path, error) from error
    logger.info("Wrote %d bytes from %s to %s", size, item.source, path)
    return WriteReport(source=item.source, path=path, size=size)


def _format_worker(source: Path, width: int, completed: _CompletionQueue) -> None:
    logger.debug("Formatting %s", source)
    try:
        content = read_and_format(source, width)
    except Exception as exc:  # noqa: BLE001
        completed.put_nowait(_WorkerFailure(source=source, error=exc))
        return
    completed.put_nowait(FormattedText(source=source, content=content))
    logger.debug("Formatted %s (%d bytes)", source, len(content))


def _join_workers(workers: list[threading.Thread]) -> None:
    # Every worker has enqueued its item, so each join returns promptly.
    for worker in workers:
        worker.join()


def _abandon_workers(workers: list[threading.Thread]) -> None:
    for worker in workers:
        if worker.is_alive():
            logger.warning("Worker %s still running after the run was aborted", worker.name)
