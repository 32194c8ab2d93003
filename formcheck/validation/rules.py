"""Rule Specifications

A rule string names a predicate, optionally followed by arguments joined
with the separator (``||`` by default)::

    "required"
    "match||[1-9]\\d{3}"
    "between||1||10||"

Arguments stay plain strings. Numeric or date interpretation happens
inside the predicate, never here.
"""
from __future__ import annotations

from dataclasses import dataclass

from formcheck.core.config import settings

from .registry import normalize


@dataclass(frozen=True, slots=True)
class RuleSpec:
    """One parsed rule: predicate name, arguments and failure message."""
    name: str
    args: tuple[str, ...]
    message: str
    source: str = ""

    @property
    def normalized_name(self) -> str:
        return normalize(self.name)

    def __str__(self) -> str:
        return self.source or self.name


def parse_rule(spec: str, message: str, separator: str | None = None) -> RuleSpec:
    """Split a rule string into name and arguments."""
    name, *args = spec.split(separator or settings.RULE_SEPARATOR)
    return RuleSpec(name=name, args=tuple(args), message=message, source=spec)
