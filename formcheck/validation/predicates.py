"""Validation Predicates

Stateless boolean checks behind every rule name. Each predicate takes the
value under test plus the rule's string arguments and answers pass/fail.
Predicates never raise: anything they cannot parse simply fails.

Comparison predicates (``min``, ``max``, ``between``, ``less``, ``greater``)
share one operand model:

- with a date format, value and bounds are parsed as dates and compared
  chronologically
- without one, a numeric value is compared by magnitude and any other
  value by its character length

So ``min||3`` reads "at least 3 characters" for ``"abc"`` but "at least 3"
for ``"15"``. Numeric-looking strings are always compared by value.
"""
from __future__ import annotations

import ipaddress
import operator
import re
from collections.abc import Collection
from functools import lru_cache
from typing import Any, Callable
from urllib.parse import urlsplit

from email_validator import SPECIAL_USE_DOMAIN_NAMES, EmailNotValidError, validate_email

from formcheck.core.errors import sequence_results

from .dates import DEFAULT_FORMAT, matches_format, parse_date

Number = int | float

# Numeric strings: optional sign, digits with optional fraction (or a bare
# fraction), optional exponent. Surrounding whitespace is tolerated.
_NUMERIC_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")
_INTEGER_RE = re.compile(r"\s*[+-]?\d+\s*")
# int() refuses longer digit strings by default (sys.get_int_max_str_digits)
_MAX_INT_DIGITS = 4000

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_HOST_LABEL_RE = re.compile(r"(?!-)[A-Za-z0-9_\-]{1,63}(?<!-)")
_HIERARCHICAL_SCHEMES = frozenset({"http", "https", "ftp", "ftps", "ws", "wss", "sftp", "ssh", "git"})
_RESERVED_TLDS = frozenset(SPECIAL_USE_DOMAIN_NAMES)


# ============================================================================
# Operand helpers
# ============================================================================

def to_number(value: Any) -> Number | None:
    """Numeric magnitude of value, or None if value is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str) and _NUMERIC_RE.fullmatch(value):
        # Integral strings stay exact beyond float precision
        if _INTEGER_RE.fullmatch(value) and len(value) <= _MAX_INT_DIGITS:
            return int(value)
        return float(value)
    return None


def is_numeric(value: Any) -> bool:
    return to_number(value) is not None


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _subject(value: Any) -> Number:
    number = to_number(value)
    return number if number is not None else len(_as_text(value))


def _operands(value: Any, bounds: tuple[str, ...], fmt: str | None) -> tuple[Any, list[Any]] | None:
    """Resolve (subject, bounds) for a comparison, or None if anything fails to parse."""
    if fmt:
        parsed = sequence_results([parse_date(item, fmt) for item in (value, *bounds)])
        if parsed.is_err():
            return None
        subject, *limits = parsed.unwrap()
        return subject, limits

    limits = [to_number(bound) for bound in bounds]
    if any(limit is None for limit in limits):
        return None
    return _subject(value), limits


def _compare(value: Any, bound: str, fmt: str | None, op: Callable[[Any, Any], bool]) -> bool:
    operands = _operands(value, (bound,), fmt)
    if operands is None:
        return False
    subject, (limit,) = operands
    return op(subject, limit)


# ============================================================================
# Presence and equality
# ============================================================================

def is_required(value: Any) -> bool:
    """Fails for "", None, False and empty containers. 0 and "0" pass."""
    if value is None or value is False or value == "":
        return False
    if isinstance(value, Collection) and not isinstance(value, str):
        return len(value) > 0
    return True


def is_equal(value: Any, compare: Any) -> bool:
    """Strict equality: same type and same value, no coercion."""
    return type(value) is type(compare) and value == compare


# ============================================================================
# Format predicates
# ============================================================================

@lru_cache(maxsize=256)
def _compiled(pattern: str) -> re.Pattern | None:
    try:
        return re.compile(pattern)
    except re.error:
        return None


def matches(value: Any, pattern: str) -> bool:
    """Value matches the whole pattern, anchored at both ends."""
    if value is None or (isinstance(value, Collection) and not isinstance(value, str)):
        return False
    compiled = _compiled(pattern)
    return compiled is not None and compiled.fullmatch(str(value)) is not None


def is_email(value: Any) -> bool:
    """Well-formed address. Domain names need a dot; bracketed IP literals are allowed."""
    if not isinstance(value, str) or "@" not in value:
        return False
    local, _, domain = value.rpartition("@")
    address = value
    if domain.rstrip(".").rpartition(".")[2].lower() in _RESERVED_TLDS:
        # The mail library refuses reserved names (.local, .test) that are still well-formed hosts
        if not _valid_host(domain):
            return False
        address = f"{local}@example.com"
    try:
        validate_email(
            address,
            check_deliverability=False,
            globally_deliverable=False,
            allow_domain_literal=True,
        )
    except EmailNotValidError:
        return False
    return domain.startswith("[") or "." in domain


def _valid_host(host: str) -> bool:
    if host.startswith("["):
        try:
            ipaddress.IPv6Address(host[1:-1] if host.endswith("]") else host)
        except ValueError:
            return False
        return host.endswith("]")
    labels = host.rstrip(".").split(".")
    return all(_HOST_LABEL_RE.fullmatch(label) for label in labels)


def is_url(value: Any) -> bool:
    """Scheme plus host for web-style URLs; scheme plus any body otherwise."""
    if not isinstance(value, str) or not value or any(c.isspace() for c in value):
        return False
    scheme, sep, rest = value.partition(":")
    if not sep or not _SCHEME_RE.fullmatch(scheme) or not rest:
        return False

    try:
        parts = urlsplit(value)
    except ValueError:  # e.g. unbalanced IPv6 brackets
        return False
    if scheme.lower() not in _HIERARCHICAL_SCHEMES:
        return bool(parts.netloc or parts.path)

    host = parts.netloc.rpartition("@")[2]
    if ":" in host and not host.endswith("]"):
        host, _, port = host.rpartition(":")
        if not port.isdigit() or int(port) > 65535:
            return False
    return bool(host) and _valid_host(host)


def is_date(value: Any, fmt: str | None = DEFAULT_FORMAT) -> bool:
    """Value is a real calendar date written exactly in fmt."""
    return matches_format(value, fmt or DEFAULT_FORMAT)


# ============================================================================
# Comparison predicates
# ============================================================================

def at_least(value: Any, bound: str, fmt: str | None = None) -> bool:
    return _compare(value, bound, fmt, operator.ge)


def at_most(value: Any, bound: str, fmt: str | None = None) -> bool:
    return _compare(value, bound, fmt, operator.le)


def between(value: Any, low: str, high: str, fmt: str | None = None) -> bool:
    """Inclusive range check, both bounds in the same mode as the value."""
    operands = _operands(value, (low, high), fmt)
    if operands is None:
        return False
    subject, (lower, upper) = operands
    return lower <= subject <= upper


def less_than(value: Any, bound: str, fmt: str | None = None) -> bool:
    return _compare(value, bound, fmt, operator.lt)


def greater_than(value: Any, bound: str, fmt: str | None = None) -> bool:
    return _compare(value, bound, fmt, operator.gt)


__all__ = [
    "to_number",
    "is_numeric",
    "is_required",
    "is_equal",
    "matches",
    "is_email",
    "is_url",
    "is_date",
    "at_least",
    "at_most",
    "between",
    "less_than",
    "greater_than",
]
