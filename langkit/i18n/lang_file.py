"""``.lang`` file reading — UTF-8, one ``key=value`` per line, ``#`` comments."""

from __future__ import annotations

import io
from typing import BinaryIO, Iterator

COMMENT_PREFIX = "#"
DELIMITER = "="


def lang_path(code: str) -> str:
    """Conventional path of a locale's file inside each resource domain."""
    return f"lang/{code}.lang"


def iter_lines(stream: BinaryIO) -> Iterator[str]:
    """Yield decoded lines without their line terminator."""
    for line in io.TextIOWrapper(stream, encoding="utf-8", errors="replace"):
        yield line.rstrip("\r\n")


def split_entry(line: str) -> tuple[str, str] | None:
    """Split on the first ``=``; ``None`` when the line has no delimiter."""
    key, sep, value = line.partition(DELIMITER)
    if not sep:
        return None
    return key, value


def parse_line(line: str) -> tuple[str, str] | None:
    """Parse one line; blank lines, comments and malformed lines give ``None``."""
    if not line or line.startswith(COMMENT_PREFIX):
        return None
    return split_entry(line)
