"""User routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from forum.application.usecase.common import UserView, VotePage
from forum.application.usecase.user import GetUserProfileUseCase
from forum.application.usecase.vote import ListUserVotesRequest, ListUserVotesUseCase
from forum.domain.service import JWTService
from forum.interface.api.auth import require_user_id
from forum.interface.api.errors import to_http_exception

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/me/votes", response_model=VotePage)
async def list_my_votes(
    list_user_votes_use_case: FromDishka[ListUserVotesUseCase],
    jwt_service: FromDishka[JWTService],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> VotePage:
    """List the votes cast by the signed-in user."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await list_user_votes_use_case.execute(
            ListUserVotesRequest(user_id=user_id, page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "list votes") from e


@router.get("/{user_id}", response_model=UserView)
async def get_user_profile(
    user_id: UUID, get_user_profile_use_case: FromDishka[GetUserProfileUseCase]
) -> UserView:
    """Get a user's public profile."""
    try:
        return await get_user_profile_use_case.execute(str(user_id))
    except Exception as e:
        raise to_http_exception(e, "fetch user profile") from e
