"""Get current user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from forum.domain.model import User
from forum.domain.service import JWTService, UserService
from forum.domain.value import UserId, UserRole


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class CurrentUserResponse(BaseModel):
    """The signed-in user's own account."""

    user_id: str
    name: str
    email: str
    role: UserRole
    is_admin: bool
    avatar_url: str | None
    post_count: int
    comment_count: int
    joined_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "CurrentUserResponse":
        return cls(
            user_id=str(user.id),
            name=user.name,
            email=user.email,
            role=user.role,
            is_admin=user.is_admin,
            avatar_url=user.avatar_url,
            post_count=len(user.post_ids),
            comment_count=len(user.comment_ids),
            joined_at=user.joined_at,
        )


class GetCurrentUserUseCase:
    """Use case for resolving the user behind a session token."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> CurrentUserResponse:
        """Execute get current user flow.

        Args:
            request: Request with JWT token

        Returns:
            User information if token is valid and user exists

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If user not found
        """
        payload = self.jwt_service.verify_token(request.token)
        user = await self.user_service.get_by_id(UserId(UUID(payload.user_id)))
        return CurrentUserResponse.from_user(user)
