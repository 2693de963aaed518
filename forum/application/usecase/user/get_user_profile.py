"""Get user profile use case."""

from uuid import UUID

from forum.application.usecase.common import UserView
from forum.domain.service import UserService
from forum.domain.value import UserId


class GetUserProfileUseCase:
    """Use case for a user's public profile."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, user_id: str) -> UserView:
        """Raises NotFoundError if the user doesn't exist."""
        user = await self.user_service.get_by_id(UserId(UUID(user_id)))
        return UserView.from_user(user)
