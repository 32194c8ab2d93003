"""Date Format Handling

Date rules accept three notations, detected per format string:

- strftime notation, anything containing ``%`` (``%Y-%m-%d``)
- token notation, anything containing ``YYYY`` or ``DD`` (``YYYY-MM-DD``)
- classic one-letter notation used by form back-ends (``Y-m-d``, ``d.m.Y H:i``)

Each format compiles once into a strptime pattern plus a renderer. The
renderer lets ``matches_format`` demand a strict round trip: a value is a
date in a format only if parsing and re-rendering reproduces it exactly.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from functools import lru_cache
from typing import Any, Callable

from formcheck.core.errors import AppError, Ok, Result, invalid_date

DEFAULT_FORMAT = "Y-m-d"

Renderer = Callable[[datetime], str]


class Notation(str, Enum):
    STRFTIME = "strftime"
    TOKENS = "tokens"
    CLASSIC = "classic"


def _hour12(moment: datetime) -> int:
    return (moment.hour % 12) or 12


# letter -> (strptime directive, renderer)
_CLASSIC: dict[str, tuple[str, Renderer]] = {
    "Y": ("%Y", lambda d: f"{d.year:04d}"),
    "y": ("%y", lambda d: f"{d.year % 100:02d}"),
    "m": ("%m", lambda d: f"{d.month:02d}"),
    "n": ("%m", lambda d: str(d.month)),
    "d": ("%d", lambda d: f"{d.day:02d}"),
    "j": ("%d", lambda d: str(d.day)),
    "H": ("%H", lambda d: f"{d.hour:02d}"),
    "G": ("%H", lambda d: str(d.hour)),
    "h": ("%I", lambda d: f"{_hour12(d):02d}"),
    "g": ("%I", lambda d: str(_hour12(d))),
    "i": ("%M", lambda d: f"{d.minute:02d}"),
    "s": ("%S", lambda d: f"{d.second:02d}"),
    "A": ("%p", lambda d: "AM" if d.hour < 12 else "PM"),
    "a": ("%p", lambda d: "am" if d.hour < 12 else "pm"),
    "D": ("%a", lambda d: d.strftime("%a")),
    "l": ("%A", lambda d: d.strftime("%A")),
    "M": ("%b", lambda d: d.strftime("%b")),
    "F": ("%B", lambda d: d.strftime("%B")),
}

_TOKENS: dict[str, str] = {
    "YYYY": "Y", "YY": "y", "MM": "m", "DD": "d", "HH": "H", "mm": "i", "ss": "s",
}
_TOKEN_RE = re.compile(r"(YYYY|YY|MM|DD|HH|mm|ss)")


def _literal(text: str) -> Renderer:
    return lambda _moment: text


@dataclass(frozen=True, slots=True)
class DateFormat:
    """A compiled date format: strptime pattern plus exact renderer."""
    source: str
    notation: Notation
    pattern: str
    parts: tuple[Renderer, ...]

    def parse(self, value: str) -> datetime:
        """Parse value. Raises ValueError if it does not fit the pattern."""
        return datetime.strptime(value, self.pattern)

    def render(self, moment: datetime) -> str:
        return "".join(part(moment) for part in self.parts)


def notation_of(fmt: str) -> Notation:
    if "%" in fmt:
        return Notation.STRFTIME
    if "YYYY" in fmt or "DD" in fmt:
        return Notation.TOKENS
    return Notation.CLASSIC


def _compile_pieces(pieces: list[tuple[bool, str]]) -> tuple[str, tuple[Renderer, ...]]:
    """Join (is_directive, text) pieces into a strptime pattern and renderers."""
    pattern, parts = [], []
    for is_directive, text in pieces:
        if is_directive:
            directive, renderer = _CLASSIC[text]
            pattern.append(directive)
            parts.append(renderer)
        else:
            pattern.append(text.replace("%", "%%"))
            parts.append(_literal(text))
    return "".join(pattern), tuple(parts)


def _classic_pieces(fmt: str) -> list[tuple[bool, str]]:
    pieces: list[tuple[bool, str]] = []
    chars = iter(fmt)
    for char in chars:
        if char == "\\":
            pieces.append((False, next(chars, "\\")))
        else:
            pieces.append((char in _CLASSIC, char))
    return pieces


def _token_pieces(fmt: str) -> list[tuple[bool, str]]:
    return [
        (True, _TOKENS[chunk]) if chunk in _TOKENS else (False, chunk)
        for chunk in _TOKEN_RE.split(fmt) if chunk
    ]


@lru_cache(maxsize=128)
def compile_format(fmt: str) -> DateFormat:
    """Compile a format string in any supported notation."""
    notation = notation_of(fmt)
    if notation is Notation.STRFTIME:
        return DateFormat(fmt, notation, fmt, (lambda d: d.strftime(fmt),))
    pieces = _token_pieces(fmt) if notation is Notation.TOKENS else _classic_pieces(fmt)
    pattern, parts = _compile_pieces(pieces)
    return DateFormat(fmt, notation, pattern, parts)


def parse_date(value: Any, fmt: str | None = None) -> Result[datetime, AppError]:
    """Parse a value under a format, lenient about zero padding."""
    fmt = fmt or DEFAULT_FORMAT
    if not isinstance(value, str):
        return invalid_date(value, fmt, origin="dates")
    try:
        return Ok(compile_format(fmt).parse(value))
    except ValueError as e:
        return invalid_date(value, fmt, cause=e, origin="dates")


def format_date(moment: datetime, fmt: str | None = None) -> str:
    return compile_format(fmt or DEFAULT_FORMAT).render(moment)


def matches_format(value: Any, fmt: str | None = None) -> bool:
    """True if value parses under fmt and renders back to exactly the same text."""
    fmt = fmt or DEFAULT_FORMAT
    return parse_date(value, fmt).map(lambda moment: format_date(moment, fmt) == value).unwrap_or(False)
