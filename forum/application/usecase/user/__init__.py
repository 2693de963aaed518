"""User use cases."""

from .get_user_profile import GetUserProfileUseCase

__all__ = ["GetUserProfileUseCase"]
