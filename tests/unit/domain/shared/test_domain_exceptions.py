"""Unit tests for the domain exception hierarchy."""

import pytest

from userhub.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    InternalConsistencyError,
    ValidationError,
)
from userhub.domain.user import (
    DuplicateRecordError,
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidRoleError,
    UserNotDeletedError,
    UserNotFoundError,
    UserStateInconsistencyError,
    WeakPasswordError,
)


@pytest.mark.parametrize(
    ("exc", "base", "code"),
    [
        (EmailAlreadyExistsError("a@x.com"), ConflictError, ErrorCode.EMAIL_ALREADY_EXISTS),
        (UserNotFoundError(7), EntityNotFoundError, ErrorCode.USER_NOT_FOUND),
        (InvalidEmailError("bad"), ValidationError, ErrorCode.INVALID_EMAIL),
        (WeakPasswordError(), ValidationError, ErrorCode.WEAK_PASSWORD),
        (InvalidRoleError("root"), ValidationError, ErrorCode.INVALID_ROLE),
        (UserNotDeletedError(7), BusinessRuleViolation, ErrorCode.USER_NOT_DELETED),
        (
            UserStateInconsistencyError(7),
            InternalConsistencyError,
            ErrorCode.INCONSISTENT_STATE,
        ),
    ],
)
def test_user_exceptions_map_to_kinds(exc, base, code):
    assert isinstance(exc, base)
    assert isinstance(exc, DomainException)
    assert exc.code == code


def test_messages_name_the_subject():
    assert str(UserNotFoundError(7)) == "User with ID 7 not found"
    assert str(UserNotDeletedError(7)) == "User with ID 7 is not deleted"
    assert "a@x.com" in str(EmailAlreadyExistsError("a@x.com"))
    assert EmailAlreadyExistsError("a@x.com").details == {"email": "a@x.com"}


def test_inconsistency_is_not_a_not_found():
    assert not isinstance(UserStateInconsistencyError(7), EntityNotFoundError)


def test_duplicate_record_is_not_a_domain_exception():
    assert not isinstance(DuplicateRecordError("email", "a@x.com"), DomainException)


def test_repr_includes_code():
    assert "USER_NOT_FOUND" in repr(UserNotFoundError(3))
