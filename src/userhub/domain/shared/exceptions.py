"""Shared domain exceptions and error codes.

This module defines the base exception hierarchy and error codes for the
domain layer. All domain exceptions inherit from DomainException so the
presentation layer can handle them in one place.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for callers.

    These codes are part of the public contract. Should not be changed.
    """

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EMAIL = "INVALID_EMAIL"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    INVALID_ROLE = "INVALID_ROLE"

    # Not Found Errors
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Conflict Errors
    CONFLICT = "CONFLICT"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"

    # Business Rule Violations
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    USER_NOT_DELETED = "USER_NOT_DELETED"

    # Internal Errors
    INCONSISTENT_STATE = "INCONSISTENT_STATE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all domain-related errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not shown to users)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(DomainException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class BusinessRuleViolation(DomainException):
    """Raised when an operation is not allowed in the entity's current state."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.BUSINESS_RULE_VIOLATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EntityNotFoundError(DomainException):
    """Raised when a requested entity cannot be found."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConflictError(DomainException):
    """Raised when an operation conflicts with existing data."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class InternalConsistencyError(DomainException):
    """Raised when stored state contradicts a write that just succeeded.

    Not caused by the caller; treat as fatal for the current operation.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INCONSISTENT_STATE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
