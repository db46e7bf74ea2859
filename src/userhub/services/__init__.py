from userhub.services.password_service import PasswordHashingService

__all__ = ["PasswordHashingService"]
