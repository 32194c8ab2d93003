"""Exception Bridge

Converts AppErrors into exceptions for code that does not use the Result
monad. Configuration errors always travel this way: they abort the run
instead of being collected next to validation failures.
"""
from __future__ import annotations

from typing import TypeVar

from .types import AppError, ErrorCode, Result

T = TypeVar("T")


class AppErrorException(Exception):
    """Exception wrapper for AppError."""

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    def __str__(self) -> str:
        return str(self.error)


class ConfigurationError(AppErrorException):
    """A programming or configuration mistake (bad rule, bad field, misuse)."""


class UnknownRuleError(ConfigurationError):
    """Rule name does not resolve to a known predicate."""


class InvalidRuleError(ConfigurationError):
    """Rule arguments do not fit the predicate."""


class MissingFieldError(ConfigurationError, LookupError):
    """Field name absent from the input record."""


class SessionStateError(ConfigurationError):
    """Session operation called in a state that does not allow it."""


class RuleSetError(ConfigurationError):
    """Rule-set document is malformed or unreadable."""


_EXCEPTIONS: dict[ErrorCode, type[AppErrorException]] = {
    ErrorCode.E8000_CONFIG_GENERIC: ConfigurationError,
    ErrorCode.E8001_UNKNOWN_RULE: UnknownRuleError,
    ErrorCode.E8002_MISSING_FIELD: MissingFieldError,
    ErrorCode.E8003_INVALID_RULE_ARGUMENTS: InvalidRuleError,
    ErrorCode.E8004_INVALID_SESSION_STATE: SessionStateError,
    ErrorCode.E8005_INVALID_RULE_SET: RuleSetError,
    # Unreadable rule/record files are configuration problems for the caller
    ErrorCode.E6001_FILE_NOT_FOUND: RuleSetError,
    ErrorCode.E6002_FILE_READ_ERROR: RuleSetError,
}


def exception_for(error: AppError) -> AppErrorException:
    """Build the exception registered for the error's code."""
    return _EXCEPTIONS.get(error.code, AppErrorException)(error)


def raise_error(error: AppError) -> None:
    """Raise AppError as exception.

    Usage:
        if name not in PREDICATES:
            raise_error(unknown_rule(name, PREDICATES).error)
    """
    raise exception_for(error) from error.cause


def raise_result(result: Result[T, AppError]) -> T:
    """Return the Ok value, or raise the Err as exception.

    Usage:
        rule_set = raise_result(load_document(path))
    """
    if result.is_err():
        raise_error(result.unwrap_err())
    return result.unwrap()
