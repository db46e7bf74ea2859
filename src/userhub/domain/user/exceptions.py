"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and lifecycle rule violations.
"""

from userhub.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    InternalConsistencyError,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_EMAIL)


class WeakPasswordError(ValidationError):
    """Raised when a password doesn't meet the policy."""

    def __init__(self, message: str = "Password does not meet requirements") -> None:
        super().__init__(message, code=ErrorCode.WEAK_PASSWORD)


class InvalidRoleError(ValidationError):
    """Raised when a role is outside the enumerated set."""

    def __init__(self, role: object) -> None:
        self.role = role
        super().__init__(
            f"Invalid role: {role!r}",
            code=ErrorCode.INVALID_ROLE,
            details={"role": str(role)},
        )


class EmailAlreadyExistsError(ConflictError):
    """Email already registered to an active user."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            f"User with email {email} already exists",
            code=ErrorCode.EMAIL_ALREADY_EXISTS,
            details={"email": email},
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(
            f"User with ID {user_id} not found",
            code=ErrorCode.USER_NOT_FOUND,
            details={"user_id": user_id},
        )


class UserNotDeletedError(BusinessRuleViolation):
    """Restore requested for a user that is not soft-deleted."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(
            f"User with ID {user_id} is not deleted",
            code=ErrorCode.USER_NOT_DELETED,
            details={"user_id": user_id},
        )


class UserStateInconsistencyError(InternalConsistencyError):
    """Restored user is not visible in the active view."""

    def __init__(self, user_id: int) -> None:
        self.user_id = user_id
        super().__init__(
            f"User with ID {user_id} not found after restore",
            details={"user_id": user_id},
        )
