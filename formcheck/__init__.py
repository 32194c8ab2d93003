"""formcheck - rule-string field validation for form and request handlers."""
__version__ = "0.1.0"

from formcheck.core.errors import (
    AppError,
    AppErrorException,
    ConfigurationError,
    ErrorCode,
    InvalidRuleError,
    MissingFieldError,
    RuleSetError,
    SessionStateError,
    UnknownRuleError,
)
from formcheck.validation import (
    PREDICATES,
    RuleSet,
    RuleSpec,
    SessionState,
    Validation,
    available_rules,
    get_predicate,
    load_rule_set,
    parse_rule,
    parse_rule_set_text,
)

__all__ = [
    "__version__",
    "AppError",
    "AppErrorException",
    "ConfigurationError",
    "ErrorCode",
    "InvalidRuleError",
    "MissingFieldError",
    "RuleSetError",
    "SessionStateError",
    "UnknownRuleError",
    "PREDICATES",
    "RuleSet",
    "RuleSpec",
    "SessionState",
    "Validation",
    "available_rules",
    "get_predicate",
    "load_rule_set",
    "parse_rule",
    "parse_rule_set_text",
]
