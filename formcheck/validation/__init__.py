"""Field Validation Engine

A fixed library of stateless predicates, a name-based registry that
dispatches rule strings to them, and a fluent session that evaluates
ordered rules per field and collects one error message per alias.

Usage:
    from formcheck.validation import Validation

    post = {"id": "100", "name": "", "age": "15"}
    v = Validation()
    v.bind_from_record(post, "id").attach_rule("match||[1-9]\\d{3}", "Invalid ID.").evaluate()
    v.bind_from_record(post, "name").attach_rule("required", "Name is required.").evaluate()
    v.bind_from_record(post, "age").attach_rule("min||16", "Must be 16 or older.").evaluate()
    v.errors()
    # {'id': 'Invalid ID.', 'name': 'Name is required.', 'age': 'Must be 16 or older.'}
"""

from .dates import (
    DEFAULT_FORMAT,
    DateFormat,
    Notation,
    compile_format,
    parse_date,
    format_date,
    matches_format,
)

from .predicates import (
    to_number,
    is_numeric,
    is_required,
    is_equal,
    matches,
    is_email,
    is_url,
    is_date,
    at_least,
    at_most,
    between,
    less_than,
    greater_than,
)

from .registry import (
    PREDICATES,
    Predicate,
    available_rules,
    bind_arguments,
    get_predicate,
)

from .rules import RuleSpec, parse_rule

from .session import Alias, BoundValue, SessionState, Validation

from .schema import (
    RuleEntry,
    FieldRules,
    RuleSet,
    build_rule_set,
    load_rule_set,
    parse_rule_set_text,
    read_document,
)

__all__ = [
    # Dates
    "DEFAULT_FORMAT",
    "DateFormat",
    "Notation",
    "compile_format",
    "parse_date",
    "format_date",
    "matches_format",
    # Predicates
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
    # Registry
    "PREDICATES",
    "Predicate",
    "available_rules",
    "bind_arguments",
    "get_predicate",
    # Rules
    "RuleSpec",
    "parse_rule",
    # Session
    "Alias",
    "BoundValue",
    "SessionState",
    "Validation",
    # Rule sets
    "RuleEntry",
    "FieldRules",
    "RuleSet",
    "build_rule_set",
    "load_rule_set",
    "parse_rule_set_text",
    "read_document",
]
