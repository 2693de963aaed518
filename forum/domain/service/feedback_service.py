"""Feedback domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from forum.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from forum.domain.model import Feedback, User
from forum.domain.repository import FeedbackRepository
from forum.domain.value import FeedbackId, PageRequest, UserId

from .base import Service
from .user_service import UserService


class FeedbackService(Service):
    """Domain service for user feedback. Feedback is never cached."""

    def __init__(
        self, feedback_repository: FeedbackRepository, user_service: UserService
    ) -> None:
        self.feedback_repository = feedback_repository
        self.user_service = user_service

    async def create_feedback(self, author: User, content: str) -> Feedback:
        """Record feedback from a user.

        Raises:
            pydantic.ValidationError: If the trimmed content is not 10..2000 chars
        """
        with logfire.span("feedback_service.create_feedback", user_id=str(author.id)):
            feedback = Feedback(
                id=FeedbackId(uuid4()),
                user_id=author.id,
                content=content.strip(),
                created_at=datetime.now(),
            )
            saved = await self.feedback_repository.save(feedback)
            logfire.info("Feedback created", feedback_id=str(saved.id))
            return saved

    async def get_feedback(self, feedback_id: FeedbackId) -> Feedback:
        """Get feedback by ID.

        Raises:
            NotFoundError: If feedback not found
        """
        feedback = await self.feedback_repository.find_by_id(feedback_id)
        if not feedback:
            raise NotFoundError("Feedback", str(feedback_id))
        return feedback

    async def list_feedback(
        self,
        page: PageRequest,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> tuple[list[Feedback], int]:
        """List feedback newest first, optionally within a time range.

        Raises:
            ValidationError: If ``start`` is after ``end``
        """
        with logfire.span(
            "feedback_service.list_feedback",
            page=page.page,
            start=start.isoformat() if start else None,
            end=end.isoformat() if end else None,
        ):
            if start and end and start > end:
                raise ValidationError("Start date must be before end date")
            items = await self.feedback_repository.find_all(
                limit=page.limit, offset=page.offset, start=start, end=end
            )
            total = await self.feedback_repository.count(start=start, end=end)
            return items, total

    async def list_feedback_by_user(
        self, user_id: UserId, page: PageRequest
    ) -> tuple[list[Feedback], int]:
        """List a user's feedback, newest first.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span(
            "feedback_service.list_feedback_by_user", user_id=str(user_id)
        ):
            await self.user_service.get_by_id(user_id)
            items = await self.feedback_repository.find_by_user(
                user_id, limit=page.limit, offset=page.offset
            )
            return items, await self.feedback_repository.count_by_user(user_id)

    async def delete_feedback(
        self, feedback_id: FeedbackId, requester_id: UserId
    ) -> None:
        """Delete feedback on behalf of its author.

        Raises:
            NotFoundError: If feedback not found
            NotAuthorizedError: If the requester isn't the author
        """
        with logfire.span(
            "feedback_service.delete_feedback", feedback_id=str(feedback_id)
        ):
            feedback = await self.get_feedback(feedback_id)
            if feedback.user_id != requester_id:
                raise NotAuthorizedError(
                    "feedback", str(feedback_id), str(requester_id)
                )
            await self.feedback_repository.delete(feedback_id)
            logfire.info("Feedback deleted", feedback_id=str(feedback_id))
