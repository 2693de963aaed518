"""Login use case."""

import logfire
from pydantic import BaseModel

from forum.domain.service import JWTService, UserService


class LoginRequest(BaseModel):
    """Login request.

    Carries the profile confirmed by the identity provider once its handshake
    has completed.
    """

    name: str
    email: str
    avatar_url: str | None = None


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    user_id: str
    name: str


class LoginUseCase:
    """Use case for signing a user in and issuing a session token."""

    def __init__(self, user_service: UserService, jwt_service: JWTService) -> None:
        """Initialize login use case.

        Args:
            user_service: User domain service
            jwt_service: JWT token domain service
        """
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Steps:
        1. Find the user by email, registering them on first login
        2. Issue a session token

        Args:
            request: Login request

        Returns:
            Session token and user details

        Raises:
            pydantic.ValidationError: If the name or email is invalid
        """
        with logfire.span("login.execute", email=request.email):
            user = await self.user_service.register(
                name=request.name, email=request.email, avatar_url=request.avatar_url
            )
            token = self.jwt_service.create_token(str(user.id), user.email)
            logfire.info("User logged in", user_id=str(user.id))
            return LoginResponse(token=token, user_id=str(user.id), name=user.name)
