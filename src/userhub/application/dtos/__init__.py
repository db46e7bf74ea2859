from userhub.application.dtos.user_dto import UserDTO, UserUpdate

__all__ = ["UserDTO", "UserUpdate"]
