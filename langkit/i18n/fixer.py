"""Legacy placeholder fixer — ``%d`` / ``%1$.2f`` become ``%s`` / ``%1$s``."""

from __future__ import annotations

import re

# Optional positional index, optional width/precision digits, then d or f.
_LEGACY_PLACEHOLDER = re.compile(r"%(\d+\$)?[\d.]*[df]")


def fix_format(value: str) -> str:
    """Rewrite numeric placeholders to string placeholders, keeping the index."""
    return _LEGACY_PLACEHOLDER.sub(r"%\1s", value)
