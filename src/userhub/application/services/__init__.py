from userhub.application.services.user_lifecycle_service import UserLifecycleService

__all__ = ["UserLifecycleService"]
