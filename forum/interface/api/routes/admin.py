"""Admin routes.

Every route requires a session whose user holds the ``admin`` role:
no session is 401, any other role is 403.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from forum.application.usecase.admin import (
    AdminDeletePostUseCase,
    DashboardStats,
    DashboardStatsRequest,
    DashboardStatsUseCase,
    ListUsersRequest,
    ListUsersUseCase,
    ModeratePostRequest,
    ToggleBanRequest,
    ToggleBanUseCase,
    ToggleLockUseCase,
    TogglePinUseCase,
    UserPage,
)
from forum.application.usecase.common import PostView, UserView
from forum.application.usecase.post import DeletePostResponse
from forum.domain.service import JWTService
from forum.interface.api.auth import require_user_id
from forum.interface.api.errors import to_http_exception

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


@router.patch("/posts/{post_id}/pin", response_model=PostView)
async def toggle_pin(
    post_id: UUID,
    toggle_pin_use_case: FromDishka[TogglePinUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostView:
    """Pin or unpin a post."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await toggle_pin_use_case.execute(
            ModeratePostRequest(post_id=str(post_id), user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "toggle pin") from e


@router.patch("/posts/{post_id}/lock", response_model=PostView)
async def toggle_lock(
    post_id: UUID,
    toggle_lock_use_case: FromDishka[ToggleLockUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostView:
    """Lock or unlock a post; locked posts accept no new comments."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await toggle_lock_use_case.execute(
            ModeratePostRequest(post_id=str(post_id), user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "toggle lock") from e


@router.delete("/posts/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: UUID,
    admin_delete_post_use_case: FromDishka[AdminDeletePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeletePostResponse:
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await admin_delete_post_use_case.execute(
            ModeratePostRequest(post_id=str(post_id), user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "delete post") from e


@router.patch("/users/{user_id}/ban", response_model=UserView)
async def toggle_ban(
    user_id: UUID,
    toggle_ban_use_case: FromDishka[ToggleBanUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UserView:
    """Ban a user or lift their ban. Admins cannot be banned."""
    try:
        admin_id = require_user_id(jwt_service, auth_token)
        return await toggle_ban_use_case.execute(
            ToggleBanRequest(target_user_id=str(user_id), user_id=admin_id)
        )
    except Exception as e:
        raise to_http_exception(e, "toggle ban") from e


@router.get("/users", response_model=UserPage)
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> UserPage:
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await list_users_use_case.execute(
            ListUsersRequest(user_id=user_id, page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "list users") from e


@router.get("/dashboard/stats", response_model=DashboardStats)
async def dashboard_stats(
    dashboard_stats_use_case: FromDishka[DashboardStatsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DashboardStats:
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await dashboard_stats_use_case.execute(
            DashboardStatsRequest(user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "fetch dashboard stats") from e
