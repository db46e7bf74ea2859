from userhub.domain.user.repositories.user_repository import (
    DuplicateRecordError,
    UserRepository,
)

__all__ = ["DuplicateRecordError", "UserRepository"]
