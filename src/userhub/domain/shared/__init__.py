"""Shared domain primitives."""

from userhub.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    InternalConsistencyError,
    ValidationError,
)
from userhub.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "BusinessRuleViolation",
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "InternalConsistencyError",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
