"""Wide-character heuristic for a loaded translation table."""

from __future__ import annotations

from typing import Iterable

UNICODE_THRESHOLD = 0.1


def is_unicode(values: Iterable[str]) -> bool:
    """
    True when more than 10% of all characters have a code point >= 256.

    An empty table has no characters and is never considered unicode.
    """
    total = 0
    wide = 0
    for value in values:
        total += len(value)
        wide += sum(1 for ch in value if ord(ch) >= 256)
    if total == 0:
        return False
    return wide / total > UNICODE_THRESHOLD
