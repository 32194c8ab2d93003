"""Declarative Rule Sets

A rule set is a reusable validation plan for input records, usually kept
in a YAML (or JSON) document next to the form it checks:

    separator: "||"
    fields:
      - field: id
        rules:
          - {rule: required, message: Please enter an ID.}
          - {rule: "match||[1-9]\\d{3}", message: Please enter a valid ID.}
      - field: age
        rules:
          - {rule: "min||16", message: You must be 16 or older.}

Documents are validated with pydantic when loaded, including rule names,
so a typo in a rule fails at load time instead of on the first record.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from formcheck.core.config import settings
from formcheck.core.errors import (
    AppError,
    Ok,
    Result,
    file_not_found,
    file_read_error,
    invalid_rule_set,
    raise_error,
    raise_result,
)

from .registry import get_predicate
from .rules import parse_rule
from .session import Alias, Validation


class RuleEntry(BaseModel):
    """One rule string plus the message shown when it fails."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    rule: str = Field(min_length=1)
    message: str


class FieldRules(BaseModel):
    """Ordered rules for one record field."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    field: str = Field(min_length=1)
    alias: str | None = None
    rules: list[RuleEntry] = Field(min_length=1)

    @property
    def error_key(self) -> str:
        return self.alias or self.field


class RuleSet(BaseModel):
    """Validation plan for a whole record."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    fields: list[FieldRules]
    separator: str = Field(default_factory=lambda: settings.RULE_SEPARATOR, min_length=1)

    @model_validator(mode="after")
    def _check_rule_names(self) -> RuleSet:
        for field_rules in self.fields:
            for entry in field_rules.rules:
                # Raises UnknownRuleError, which pydantic does not swallow
                get_predicate(parse_rule(entry.rule, entry.message, self.separator).name)
        return self

    @property
    def field_names(self) -> list[str]:
        return [f.field for f in self.fields]

    def session(self) -> Validation:
        return Validation(separator=self.separator)

    def apply(self, session: Validation, record: Mapping[str, Any]) -> Validation:
        """Bind, attach and evaluate every field of the plan on the session."""
        for field_rules in self.fields:
            session.bind_from_record(record, field_rules.field)
            if field_rules.alias:
                session.set_alias(field_rules.alias)
            for entry in field_rules.rules:
                session.attach_rule(entry.rule, entry.message)
            session.evaluate()
        return session

    def validate_record(self, record: Mapping[str, Any], session: Validation | None = None) -> dict[Alias, str]:
        """Validate one record; returns the error map (empty when valid)."""
        return self.apply(session or self.session(), record).errors()

    def validate_records(self, records: Iterable[Mapping[str, Any]]) -> list[dict[Alias, str]]:
        """Validate many records with one session, one error map per record."""
        session = self.session()
        return [self.validate_record(record, session) for record in records]


def _format_pydantic_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ())) or "$"
        parts.append(f"{loc}: {error.get('msg', 'invalid')}")
    return "; ".join(parts)


def build_rule_set(document: Any, source: str | None = None) -> Result[RuleSet, AppError]:
    if not isinstance(document, Mapping):
        return invalid_rule_set("expected a mapping with a 'fields' list", source, origin="schema")
    try:
        return Ok(RuleSet.model_validate(document))
    except ValidationError as e:
        return invalid_rule_set(_format_pydantic_errors(e), source, origin="schema")


def read_document(path: str | Path) -> Result[Any, AppError]:
    """Read a YAML or JSON file (JSON is valid YAML)."""
    path = Path(path)
    if not path.is_file():
        return file_not_found(str(path), origin="schema")
    try:
        with path.open(encoding="utf-8") as fh:
            return Ok(yaml.safe_load(fh))
    except (OSError, yaml.YAMLError) as e:
        return file_read_error(str(path), e, origin="schema")


def parse_rule_set_text(text: str, source: str | None = None) -> RuleSet:
    """Parse a YAML/JSON rule-set document. Raises RuleSetError."""
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise_error(invalid_rule_set(f"not valid YAML ({e})", source, origin="schema").error)
    return raise_result(build_rule_set(document, source))


def load_rule_set(source: str | Path | Mapping[str, Any]) -> RuleSet:
    """Load a rule set from a file path or an already-parsed mapping. Raises RuleSetError."""
    if isinstance(source, Mapping):
        return raise_result(build_rule_set(source))
    document = raise_result(read_document(source))
    return raise_result(build_rule_set(document, str(source)))
