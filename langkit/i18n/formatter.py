"""Positional ``%`` substitution for translation templates.

Only what translation files use is supported::

    %s  %S  %1$s  %-8s  %.3s  %d  %+,d  %(d  %08.2f  %%  %n

Numbers take the ``-``, ``+``, space, ``0``, ``,`` and ``(`` flags; strings
only ``-``.  ``-`` and ``0`` require a width.

Anything else, or a specifier without a matching argument, raises
``FormatError``.  Surplus arguments are ignored.
"""

from __future__ import annotations

import re
from typing import Any, Sequence

from langkit.errors import FormatError

_SPECIFIER = re.compile(
    r"%(?:(?P<index>\d+)\$)?(?P<flags>[-#+ 0,(]*)(?P<width>\d+)?(?:\.(?P<precision>\d+))?(?P<conv>[a-zA-Z%])?"
)
_STRING_FLAGS = "-"
_NUMBER_FLAGS = "-+ 0,("


def _argument(spec: re.Match[str], args: Sequence[Any], position: int) -> Any:
    if spec.group("index") is not None:
        index = int(spec.group("index"))
        if index == 0:
            raise FormatError(f"Illegal format argument index in '{spec.group(0)}'")
        position = index - 1
    if position >= len(args):
        raise FormatError(f"Format specifier '{spec.group(0)}' has no argument")
    return args[position]


def _check_flags(spec: re.Match[str], allowed: str) -> None:
    flags = spec.group("flags")
    width = spec.group("width")
    bad = [f for f in flags if f not in allowed]
    if bad:
        raise FormatError(f"Flags '{''.join(bad)}' not allowed in '{spec.group(0)}'")
    if len(set(flags)) != len(flags):
        raise FormatError(f"Duplicate flags in '{spec.group(0)}'")
    if ("+" in flags and " " in flags) or ("-" in flags and "0" in flags):
        raise FormatError(f"Conflicting flags in '{spec.group(0)}'")
    if ("-" in flags or "0" in flags) and width is None:
        raise FormatError(f"Flags '{flags}' need a width in '{spec.group(0)}'")


def _pad(text: str, flags: str, width: str | None) -> str:
    if width is None:
        return text
    return text.ljust(int(width)) if "-" in flags else text.rjust(int(width))


def _signed(digits: str, negative: bool, flags: str, width: str | None) -> str:
    """Apply sign flags (``+``, space, ``(``) and zero padding to *digits*."""
    suffix = ""
    if negative:
        prefix, suffix = ("(", ")") if "(" in flags else ("-", "")
    elif "+" in flags:
        prefix = "+"
    elif " " in flags:
        prefix = " "
    else:
        prefix = ""
    if "0" in flags and width is not None:
        digits = digits.zfill(int(width) - len(prefix) - len(suffix))
    return f"{prefix}{digits}{suffix}"


def _convert(spec: re.Match[str], arg: Any) -> str:
    conv = spec.group("conv")
    flags = spec.group("flags")
    width = spec.group("width")
    precision = spec.group("precision")

    if conv in ("s", "S"):
        _check_flags(spec, _STRING_FLAGS)
        text = "null" if arg is None else str(arg)
        if precision is not None:
            text = text[: int(precision)]
        if conv == "S":
            text = text.upper()
        return text
    if conv == "d":
        _check_flags(spec, _NUMBER_FLAGS)
        if isinstance(arg, bool) or not isinstance(arg, int) or precision is not None:
            raise FormatError(f"'{spec.group(0)}' cannot format {type(arg).__name__}")
        digits = f"{abs(arg):,}" if "," in flags else str(abs(arg))
        return _signed(digits, arg < 0, flags, width)
    if conv == "f":
        _check_flags(spec, _NUMBER_FLAGS)
        if isinstance(arg, bool) or not isinstance(arg, (int, float)):
            raise FormatError(f"'{spec.group(0)}' cannot format {type(arg).__name__}")
        places = 6 if precision is None else int(precision)
        digits = f"{abs(arg):,.{places}f}" if "," in flags else f"{abs(arg):.{places}f}"
        return _signed(digits, arg < 0, flags, width)
    raise FormatError(f"Unknown format conversion in '{spec.group(0)}'")


def format_args(template: str, args: Sequence[Any]) -> str:
    """Substitute *args* into *template*; raise ``FormatError`` on any mismatch."""
    out: list[str] = []
    last = 0
    ordinary = 0
    for spec in _SPECIFIER.finditer(template):
        out.append(template[last : spec.start()])
        last = spec.end()
        conv = spec.group("conv")
        if conv is None:
            raise FormatError(f"Incomplete format specifier at offset {spec.start()}")
        if conv == "%":
            out.append(_pad("%", spec.group("flags"), spec.group("width")))
            continue
        if conv == "n":
            out.append("\n")
            continue
        arg = _argument(spec, args, ordinary)
        if spec.group("index") is None:
            ordinary += 1
        out.append(_pad(_convert(spec, arg), spec.group("flags"), spec.group("width")))
    out.append(template[last:])
    return "".join(out)
