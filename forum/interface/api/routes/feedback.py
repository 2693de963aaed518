"""Feedback routes."""

from datetime import datetime
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from forum.application.usecase.common import FeedbackPage, FeedbackView
from forum.application.usecase.feedback import (
    CreateFeedbackRequest,
    CreateFeedbackUseCase,
    DeleteFeedbackRequest,
    DeleteFeedbackResponse,
    DeleteFeedbackUseCase,
    GetFeedbackRequest,
    GetFeedbackUseCase,
    ListFeedbackRequest,
    ListFeedbackUseCase,
    ListUserFeedbackRequest,
    ListUserFeedbackUseCase,
)
from forum.domain.service import JWTService
from forum.interface.api.auth import require_user_id
from forum.interface.api.errors import to_http_exception

router = APIRouter(prefix="/feedback", tags=["feedback"], route_class=DishkaRoute)


class CreateFeedbackAPIRequest(BaseModel):
    content: str = Field(min_length=10, max_length=2000)


@router.get("", response_model=FeedbackPage)
async def list_feedback(
    list_feedback_use_case: FromDishka[ListFeedbackUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> FeedbackPage:
    """List all feedback, newest first."""
    try:
        return await list_feedback_use_case.execute(
            ListFeedbackRequest(page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "list feedback") from e


@router.get("/time-range", response_model=FeedbackPage)
async def list_feedback_in_range(
    list_feedback_use_case: FromDishka[ListFeedbackUseCase],
    start: datetime,
    end: datetime,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> FeedbackPage:
    """List feedback created between ``start`` and ``end`` (400 if reversed)."""
    try:
        return await list_feedback_use_case.execute(
            ListFeedbackRequest(start=start, end=end, page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "list feedback") from e


@router.get("/user/{user_id}", response_model=FeedbackPage)
async def list_user_feedback(
    user_id: UUID,
    list_user_feedback_use_case: FromDishka[ListUserFeedbackUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> FeedbackPage:
    try:
        return await list_user_feedback_use_case.execute(
            ListUserFeedbackRequest(user_id=str(user_id), page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "list user feedback") from e


@router.get("/{feedback_id}", response_model=FeedbackView)
async def get_feedback(
    feedback_id: UUID, get_feedback_use_case: FromDishka[GetFeedbackUseCase]
) -> FeedbackView:
    try:
        return await get_feedback_use_case.execute(
            GetFeedbackRequest(feedback_id=str(feedback_id))
        )
    except Exception as e:
        raise to_http_exception(e, "fetch feedback") from e


@router.post("", response_model=FeedbackView, status_code=status.HTTP_201_CREATED)
async def create_feedback(
    request: CreateFeedbackAPIRequest,
    create_feedback_use_case: FromDishka[CreateFeedbackUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> FeedbackView:
    """Send feedback. Requires authentication."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await create_feedback_use_case.execute(
            CreateFeedbackRequest(user_id=user_id, content=request.content)
        )
    except Exception as e:
        raise to_http_exception(e, "create feedback") from e


@router.delete("/{feedback_id}", response_model=DeleteFeedbackResponse)
async def delete_feedback(
    feedback_id: UUID,
    delete_feedback_use_case: FromDishka[DeleteFeedbackUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteFeedbackResponse:
    """Delete feedback. Only its author may delete it."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await delete_feedback_use_case.execute(
            DeleteFeedbackRequest(feedback_id=str(feedback_id), user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "delete feedback") from e
