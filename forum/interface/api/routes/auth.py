"""Authentication routes.

Sessions are issued by the sign-in flow as an HTTP-only ``auth_token``
cookie; these routes read and clear it.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response
from pydantic import BaseModel, Field

from forum.application.usecase.auth import (
    CurrentUserResponse,
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    UpdateProfileRequest,
    UpdateProfileUseCase,
)
from forum.config import Settings
from forum.domain.error import NotFoundError
from forum.domain.service import JWTService
from forum.interface.api.auth import require_user_id
from forum.interface.api.errors import to_http_exception
from forum.interface.error import AuthenticationRequiredError
from forum.util.jwt import JWTError

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class UpdateProfileAPIRequest(BaseModel):
    """API request for editing the signed-in user's profile."""

    name: str | None = Field(default=None, min_length=2, max_length=100)
    avatar_url: str | None = Field(default=None, max_length=500)


class AuthStatusResponse(BaseModel):
    """Whether the caller is signed in, without raising when they are not."""

    authenticated: bool
    user: CurrentUserResponse | None = None


class LogoutResponse(BaseModel):
    success: bool
    message: str


@router.get("/user", response_model=CurrentUserResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> CurrentUserResponse:
    """Return the signed-in user.

    Raises:
        HTTPException: 401 without a valid session, 404 if the user is gone
    """
    try:
        if not auth_token:
            raise AuthenticationRequiredError("Not authenticated")
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
    except Exception as e:
        raise to_http_exception(e, "fetch current user") from e


@router.put("/user", response_model=CurrentUserResponse)
async def update_current_user(
    request: UpdateProfileAPIRequest,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CurrentUserResponse:
    """Edit the signed-in user's name or avatar."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await update_profile_use_case.execute(
            UpdateProfileRequest(
                user_id=user_id, name=request.name, avatar_url=request.avatar_url
            )
        )
    except Exception as e:
        raise to_http_exception(e, "update profile") from e


@router.get("/check", response_model=AuthStatusResponse)
async def check_auth(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Report whether the caller is signed in.

    Never fails for anonymous callers: a missing, invalid or stale session
    simply reads as unauthenticated.
    """
    if not auth_token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
    except (JWTError, NotFoundError):
        return AuthStatusResponse(authenticated=False)
    except Exception as e:
        raise to_http_exception(e, "check authentication") from e

    return AuthStatusResponse(authenticated=True, user=user)


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response, settings: FromDishka[Settings]) -> LogoutResponse:
    """Clear the session cookie."""
    response.delete_cookie(key=settings.auth.cookie_name, path="/")
    return LogoutResponse(success=True, message="Logged out successfully")

