"""Update profile use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.error import ValidationError
from forum.domain.service import UserService
from forum.domain.value import UserId

from .get_current_user import CurrentUserResponse


class UpdateProfileRequest(BaseModel):
    """Update profile request."""

    user_id: str  # User ID from authenticated user
    name: str | None = None
    avatar_url: str | None = None


class UpdateProfileUseCase:
    """Use case for editing the signed-in user's name or avatar."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: UpdateProfileRequest) -> CurrentUserResponse:
        """Execute update profile flow.

        Raises:
            ValidationError: If neither field is given
            NotFoundError: If user not found
            pydantic.ValidationError: If the name is not 2..100 characters
        """
        if request.name is None and request.avatar_url is None:
            raise ValidationError("Nothing to update: provide a name or avatar_url")

        user = await self.user_service.update_user(
            UserId(UUID(request.user_id)),
            name=request.name,
            avatar_url=request.avatar_url,
        )
        return CurrentUserResponse.from_user(user)
