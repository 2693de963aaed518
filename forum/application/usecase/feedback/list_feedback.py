"""Feedback read use cases."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import (
    FeedbackPage,
    FeedbackView,
    PagedRequest,
)
from forum.domain.service import FeedbackService
from forum.domain.value import FeedbackId, Pagination, UserId


class ListFeedbackRequest(PagedRequest):
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class ListUserFeedbackRequest(PagedRequest):
    user_id: str


class GetFeedbackRequest(BaseModel):
    feedback_id: str


class ListFeedbackUseCase:
    """Use case for listing feedback, optionally within a time range."""

    def __init__(self, feedback_service: FeedbackService) -> None:
        self.feedback_service = feedback_service

    async def execute(self, request: ListFeedbackRequest) -> FeedbackPage:
        """Raises ValidationError if ``start`` is after ``end``."""
        page = request.page_request
        items, total = await self.feedback_service.list_feedback(
            page, start=request.start, end=request.end
        )
        return FeedbackPage(
            feedback=[FeedbackView.from_feedback(f) for f in items],
            pagination=Pagination.of(page, total),
        )


class ListUserFeedbackUseCase:
    def __init__(self, feedback_service: FeedbackService) -> None:
        self.feedback_service = feedback_service

    async def execute(self, request: ListUserFeedbackRequest) -> FeedbackPage:
        page = request.page_request
        items, total = await self.feedback_service.list_feedback_by_user(
            UserId(UUID(request.user_id)), page
        )
        return FeedbackPage(
            feedback=[FeedbackView.from_feedback(f) for f in items],
            pagination=Pagination.of(page, total),
        )


class GetFeedbackUseCase:
    def __init__(self, feedback_service: FeedbackService) -> None:
        self.feedback_service = feedback_service

    async def execute(self, request: GetFeedbackRequest) -> FeedbackView:
        feedback = await self.feedback_service.get_feedback(
            FeedbackId(UUID(request.feedback_id))
        )
        return FeedbackView.from_feedback(feedback)
