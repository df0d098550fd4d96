"""Whitespace normalization and fixed-width rewrapping."""

from __future__ import annotations

import re
from pathlib import Path

from text_reflow.config import DEFAULT_LINE_WIDTH
from text_reflow.errors import InputReadError

LINE_TERMINATOR = b"\n"

_BLANK_LINE_RE = re.compile(rb"\n\n")
_LEADING_WHITESPACE_RE = re.compile(rb"\A\s+")
_INDENT_RE = re.compile(rb"\n\s+")
_LINE_END_RE = re.compile(rb"\s*\n")
_TRAILING_WHITESPACE_RE = re.compile(rb"\s+\Z")


def format_text(raw: bytes, width: int = DEFAULT_LINE_WIDTH) -> bytes:
    """Normalize whitespace and rewrap into lines of exactly ``width`` bytes.

    The last line holds the remainder and is never empty.
    """

    return LINE_TERMINATOR.join(chunk_bytes(normalize_whitespace(raw), width))


def normalize_whitespace(raw: bytes) -> bytes:
    """Collapse text into one line of words separated by the original spacing.

    Steps run in order, each over the full text: blank lines are folded,
    leading whitespace of the text and of every line is dropped, and every
    line terminator together with the whitespace before it becomes one space.
    """

    data = _BLANK_LINE_RE.sub(b"\n", raw)
    data = _LEADING_WHITESPACE_RE.sub(b"", data)
    data = _INDENT_RE.sub(b"\n", data)
    data = _LINE_END_RE.sub(b" ", data)
    return _TRAILING_WHITESPACE_RE.sub(b"", data)


def chunk_bytes(data: bytes, width: int = DEFAULT_LINE_WIDTH) -> list[bytes]:
    """Split ``data`` into consecutive ``width``-byte chunks.

    Empty input yields no chunks; an exact multiple of ``width`` yields no
    empty trailing chunk.
    """

    if width <= 0:
        raise ValueError(f"Line width must be a positive integer, got {width!r}.")
    return [data[start : start + width] for start in range(0, len(data), width)]


def read_and_format(path: Path, width: int = DEFAULT_LINE_WIDTH) -> bytes:
    """Read one input file and return its formatted contents."""

    try:
        raw = Path(path).read_bytes()
    except OSError as error:
        raise InputReadError(Path(path), error) from error
    return format_text(raw, width)
