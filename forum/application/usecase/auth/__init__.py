"""Auth use cases."""

from .get_current_user import (
    CurrentUserResponse,
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
)
from .login import LoginRequest, LoginResponse, LoginUseCase
from .update_profile import UpdateProfileRequest, UpdateProfileUseCase

__all__ = [
    "CurrentUserResponse",
    "GetCurrentUserRequest",
    "GetCurrentUserUseCase",
    "LoginRequest",
    "LoginResponse",
    "LoginUseCase",
    "UpdateProfileRequest",
    "UpdateProfileUseCase",
]
