"""In-memory feedback repository for testing."""

from datetime import datetime
from typing import Optional

from forum.domain.model.feedback import Feedback
from forum.domain.repository.feedback import FeedbackRepository
from forum.domain.value import FeedbackId, UserId


class InMemoryFeedbackRepository(FeedbackRepository):
    """In-memory implementation of FeedbackRepository for testing."""

    def __init__(self) -> None:
        self._feedback: dict[FeedbackId, Feedback] = {}

    def _within(
        self, start: Optional[datetime], end: Optional[datetime]
    ) -> list[Feedback]:
        items = [
            f
            for f in self._feedback.values()
            if (start is None or f.created_at >= start)
            and (end is None or f.created_at <= end)
        ]
        return sorted(items, key=lambda f: f.created_at, reverse=True)

    async def find_by_id(self, feedback_id: FeedbackId) -> Optional[Feedback]:
        return self._feedback.get(feedback_id)

    async def find_all(
        self,
        limit: int = 20,
        offset: int = 0,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Feedback]:
        return self._within(start, end)[offset : offset + limit]

    async def count(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> int:
        return len(self._within(start, end))

    async def find_by_user(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> list[Feedback]:
        items = [f for f in self._within(None, None) if f.user_id == user_id]
        return items[offset : offset + limit]

    async def count_by_user(self, user_id: UserId) -> int:
        return sum(1 for f in self._feedback.values() if f.user_id == user_id)

    async def save(self, feedback: Feedback) -> Feedback:
        self._feedback[feedback.id] = feedback
        return feedback

    async def delete(self, feedback_id: FeedbackId) -> bool:
        return self._feedback.pop(feedback_id, None) is not None
