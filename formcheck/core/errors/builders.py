"""Domain-Specific Error Builders

Ergonomic constructors for typed errors. Each builder creates an AppError
with the appropriate code and context, wrapped in Err.
"""
from typing import Any, Iterable

from .types import AppError, ErrorCode, ErrorContext, Err


# =============================================================================
# Validation Errors (E2xxx)
# =============================================================================

def validation_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    field: str | None = None,
    value: str | None = None,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create validation error."""
    meta = {"field": field, "value": value, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
        cause=cause,
    ))


def invalid_date(
    value: Any, fmt: str, cause: Exception | None = None, origin: str = ""
) -> Err[AppError]:
    return validation_error(
        f"Value '{value}' is not a date in format '{fmt}'",
        code=ErrorCode.E2012_INVALID_DATE,
        value=str(value),
        format=fmt,
        origin=origin,
        cause=cause,
    )


# =============================================================================
# Resource Errors (E6xxx)
# =============================================================================

def file_not_found(path: str, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E6001_FILE_NOT_FOUND,
        message=f"File not found: {path}",
        context=ErrorContext(origin=origin),
        metadata={"path": path},
    ))


def file_read_error(path: str, cause: Exception, origin: str = "") -> Err[AppError]:
    return Err(AppError(
        code=ErrorCode.E6002_FILE_READ_ERROR,
        message=f"Could not read '{path}': {cause}",
        context=ErrorContext(origin=origin),
        metadata={"path": path},
        cause=cause,
    ))


# =============================================================================
# Configuration Errors (E8xxx)
# =============================================================================

def configuration_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E8000_CONFIG_GENERIC,
    origin: str = "",
    cause: Exception | None = None,
    **metadata,
) -> Err[AppError]:
    """Create configuration error. These are raised, never collected."""
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    ))


def unknown_rule(rule: str, available: Iterable[str], origin: str = "") -> Err[AppError]:
    available = sorted(available)
    return configuration_error(
        f"Invalid validation rule '{rule}'. Available: {', '.join(available) or 'none'}",
        code=ErrorCode.E8001_UNKNOWN_RULE,
        origin=origin,
        rule=rule,
        available=available,
    )


def invalid_rule_arguments(rule: str, reason: str, origin: str = "") -> Err[AppError]:
    return configuration_error(
        f"Invalid arguments for rule '{rule}': {reason}",
        code=ErrorCode.E8003_INVALID_RULE_ARGUMENTS,
        origin=origin,
        rule=rule,
    )


def missing_field(field: str, available: Iterable[str] = (), origin: str = "") -> Err[AppError]:
    available = [str(k) for k in available]
    msg = f"Field '{field}' is missing from the input record"
    if available:
        msg += f" (fields: {', '.join(available)})"
    return configuration_error(
        msg,
        code=ErrorCode.E8002_MISSING_FIELD,
        origin=origin,
        field=field,
    )


def invalid_session_state(operation: str, state: str, origin: str = "") -> Err[AppError]:
    return configuration_error(
        f"Cannot {operation} while the session is {state}; bind a value first",
        code=ErrorCode.E8004_INVALID_SESSION_STATE,
        origin=origin,
        operation=operation,
        state=state,
    )


def invalid_rule_set(message: str, source: str | None = None, origin: str = "") -> Err[AppError]:
    return configuration_error(
        f"Invalid rule set{f' {source}' if source else ''}: {message}",
        code=ErrorCode.E8005_INVALID_RULE_SET,
        origin=origin,
        source=source,
    )
