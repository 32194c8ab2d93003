"""Validation Session

Binds one value at a time, collects ordered rules for it, evaluates them
with short-circuit semantics and accumulates one message per alias::

    v = Validation()
    v.bind_from_record(post, "id").attach_rule("required", "Please enter an ID.") \\
        .attach_rule("match||[1-9]\\d{3}", "Please enter a valid ID.").evaluate()
    v.bind(post["age"]).set_alias("age").attach_rule("min||16", "Must be 16 or older.").evaluate()
    errors = v.errors()   # snapshot; the session is reset for the next batch

A session holds mutable per-pass state. Use one instance per concurrent
validation pass; the predicates behind it are stateless and shared.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from formcheck.core.config import settings
from formcheck.core.errors import AppError, invalid_session_state, missing_field, raise_error
from formcheck.core.logging import generate_correlation_id, validation_logger

from .registry import Predicate, bind_arguments, get_predicate
from .rules import RuleSpec, parse_rule

log = validation_logger()

Alias = str | int


class SessionState(str, Enum):
    """Lifecycle of the currently bound value."""
    UNBOUND = "unbound"
    BOUND = "bound"
    RULES_ATTACHED = "rules_attached"
    EVALUATED = "evaluated"


@dataclass(frozen=True, slots=True)
class BoundValue:
    """Value under test and the alias its error is recorded under."""
    raw: Any
    alias: Alias


class Validation:
    """Fluent validation session.

    Every binder/attacher method returns the session itself. Configuration
    mistakes (unknown rule, missing record field, use before binding) raise
    a ``ConfigurationError`` subclass immediately; data failures are only
    ever recorded in the error map.
    """

    __slots__ = ("separator", "trim_values", "_bound", "_rules", "_errors", "_counter", "_state", "_batch_id")

    def __init__(self, *, separator: str | None = None, trim_values: bool | None = None):
        self.separator = separator or settings.RULE_SEPARATOR
        self.trim_values = settings.TRIM_VALUES if trim_values is None else trim_values
        self._bound: BoundValue | None = None
        self._rules: list[RuleSpec] = []
        self._errors: dict[Alias, str] = {}
        self._counter = 0
        self._state = SessionState.UNBOUND
        self._batch_id = generate_correlation_id()

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def value(self) -> Any:
        return self._bound.raw if self._bound else None

    @property
    def alias(self) -> Alias | None:
        return self._bound.alias if self._bound else None

    @property
    def rules(self) -> tuple[RuleSpec, ...]:
        return tuple(self._rules)

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    @property
    def batch_id(self) -> str:
        return self._batch_id

    def _in_batch(self, error: AppError) -> AppError:
        """Tag an error with the current batch so it correlates with the batch logs."""
        return error.with_context(correlation_id=self._batch_id)

    def _require_bound(self, operation: str) -> BoundValue:
        if self._bound is None:
            raise_error(self._in_batch(invalid_session_state(operation, self._state.value, origin="session").error))
        return self._bound

    # ---------------------------------------------------------------- binding

    def _bind(self, value: Any, alias: Alias) -> Validation:
        if self.trim_values and isinstance(value, str):
            value = value.strip()
        self._bound = BoundValue(value, alias)
        self._rules = []
        self._state = SessionState.BOUND
        log.debug("value_bound", alias=alias, batch=self._batch_id)
        return self

    def bind(self, value: Any) -> Validation:
        """Bind a literal value under the next auto-generated alias (0, 1, 2, ...)."""
        alias = self._counter
        self._counter += 1
        return self._bind(value, alias)

    def bind_from_record(self, record: Mapping[str, Any], field: str) -> Validation:
        """Bind ``record[field]`` with the field name as alias."""
        if field not in record:
            raise_error(self._in_batch(missing_field(field, record.keys(), origin="session").error))
        return self._bind(record[field], field)

    def set_alias(self, name: Alias) -> Validation:
        bound = self._require_bound("set an alias")
        self._bound = BoundValue(bound.raw, name)
        return self

    # ------------------------------------------------------------------ rules

    def attach_rule(self, rule: str, message: str) -> Validation:
        """Append a rule for the bound value. Nothing is evaluated yet."""
        self._require_bound("attach a rule")
        self._rules.append(parse_rule(rule, message, self.separator))
        self._state = SessionState.RULES_ATTACHED
        return self

    def _resolve(self, bound: BoundValue) -> list[tuple[RuleSpec, Predicate, inspect.BoundArguments]]:
        """Resolve every rule before running any, so bad configuration never half-runs."""
        resolved = []
        for rule in self._rules:
            predicate = get_predicate(rule.name)
            resolved.append((rule, predicate, bind_arguments(rule.name, predicate, bound.raw, rule.args)))
        return resolved

    def evaluate(self) -> Validation:
        """Run the rules in order, recording the first failure's message under the alias."""
        bound = self._require_bound("evaluate")
        failed: RuleSpec | None = None
        for rule, predicate, call in self._resolve(bound):
            if not predicate(*call.args, **call.kwargs):
                failed = rule
                break

        if failed is not None:
            self._errors[bound.alias] = failed.message
            log.debug("rule_failed", alias=bound.alias, rule=failed.normalized_name, batch=self._batch_id)
        elif self._rules:
            self._errors.pop(bound.alias, None)

        self._state = SessionState.EVALUATED
        return self

    # ----------------------------------------------------------------- errors

    def errors(self) -> dict[Alias, str]:
        """Snapshot of the error map; clears errors and the alias counter for the next batch."""
        snapshot = dict(self._errors)
        log.info("batch_completed", batch=self._batch_id, error_count=len(snapshot))
        self._errors.clear()
        self._counter = 0
        self._batch_id = generate_correlation_id()
        return snapshot
