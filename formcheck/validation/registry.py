"""Predicate registry - static lookup table from rule name to predicate."""
from __future__ import annotations

import inspect
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Callable, Sequence

from formcheck.core.errors import invalid_rule_arguments, raise_error, unknown_rule

from . import predicates

Predicate = Callable[..., bool]

PREDICATES: MappingProxyType[str, Predicate] = MappingProxyType({
    "required": predicates.is_required,
    "equal": predicates.is_equal,
    "match": predicates.matches,
    "email": predicates.is_email,
    "url": predicates.is_url,
    "date": predicates.is_date,
    "min": predicates.at_least,
    "max": predicates.at_most,
    "between": predicates.between,
    "less": predicates.less_than,
    "greater": predicates.greater_than,
})


def normalize(name: str) -> str:
    return name.strip().lower()


def available_rules() -> list[str]:
    return sorted(PREDICATES)


def get_predicate(name: str) -> Predicate:
    """Resolve a rule name (case-insensitive). Raises UnknownRuleError."""
    key = normalize(name)
    if key not in PREDICATES:
        raise_error(unknown_rule(name, PREDICATES, origin="registry").error)
    return PREDICATES[key]


@lru_cache(maxsize=None)
def _signature(predicate: Predicate) -> inspect.Signature:
    return inspect.signature(predicate)


def _trim_surplus(signature: inspect.Signature, args: Sequence[str]) -> tuple[str, ...]:
    """Drop trailing empty arguments the predicate has no slot for ('required||')."""
    args = list(args)
    slots = len(signature.parameters) - 1
    while len(args) > slots and args[-1] == "":
        args.pop()
    return tuple(args)


def bind_arguments(name: str, predicate: Predicate, value: Any, args: Sequence[str]) -> inspect.BoundArguments:
    """Check that the rule's arguments fit the predicate. Raises InvalidRuleError."""
    signature = _signature(predicate)
    try:
        return signature.bind(value, *_trim_surplus(signature, args))
    except TypeError as e:
        raise_error(invalid_rule_arguments(name, f"{len(args)} argument(s) given; {e}", origin="registry").error)
