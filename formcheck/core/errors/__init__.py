"""Monadic Error Handling System

Type-safe error handling inspired by Haskell's Either monad and Rust's
Result type, with an exception bridge for fatal configuration errors.

Key components:
- Result[T, E]: Monadic container for success/failure
- AppError: Base error type with full context
- ErrorCode: Hierarchical error code taxonomy
- Builder functions: Ergonomic error construction
- ConfigurationError family: raised, never collected

Usage:
    from formcheck.core.errors import Ok, Err, Result, AppError, invalid_date

    def parse(value: str) -> Result[datetime, AppError]:
        try:
            return Ok(datetime.strptime(value, "%Y-%m-%d"))
        except ValueError as e:
            return invalid_date(value, "%Y-%m-%d", cause=e)

    match parse("2024-02-30"):
        case Ok(moment):
            print(moment.isoformat())
        case Err(error):
            log.debug(error.message, code=error.code.name)
"""
from .types import (
    # Core types
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    # Combinators
    sequence_results,
)

from .builders import (
    # Validation (E2xxx)
    validation_error,
    invalid_date,
    # Resource (E6xxx)
    file_not_found,
    file_read_error,
    # Configuration (E8xxx)
    configuration_error,
    unknown_rule,
    invalid_rule_arguments,
    missing_field,
    invalid_session_state,
    invalid_rule_set,
)

from .exceptions import (
    AppErrorException,
    ConfigurationError,
    UnknownRuleError,
    InvalidRuleError,
    MissingFieldError,
    SessionStateError,
    RuleSetError,
    exception_for,
    raise_error,
    raise_result,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    # Combinators
    "sequence_results",
    # Validation (E2xxx)
    "validation_error",
    "invalid_date",
    # Resource (E6xxx)
    "file_not_found",
    "file_read_error",
    # Configuration (E8xxx)
    "configuration_error",
    "unknown_rule",
    "invalid_rule_arguments",
    "missing_field",
    "invalid_session_state",
    "invalid_rule_set",
    # Exceptions
    "AppErrorException",
    "ConfigurationError",
    "UnknownRuleError",
    "InvalidRuleError",
    "MissingFieldError",
    "SessionStateError",
    "RuleSetError",
    "exception_for",
    "raise_error",
    "raise_result",
]
