"""Feedback repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from forum.domain.model.feedback import Feedback
from forum.domain.value import FeedbackId, UserId


class FeedbackRepository(ABC):
    """Repository for Feedback entity."""

    @abstractmethod
    async def find_by_id(self, feedback_id: FeedbackId) -> Optional[Feedback]:
        """Find feedback by ID."""
        pass

    @abstractmethod
    async def find_all(
        self,
        limit: int = 20,
        offset: int = 0,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Feedback]:
        """List feedback newest first, optionally within [start, end].

        Args:
            limit: Maximum number of entries to return
            offset: Number of entries to skip
            start: Inclusive lower bound on created_at
            end: Inclusive upper bound on created_at

        Returns:
            List of feedback entries
        """
        pass

    @abstractmethod
    async def count(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> int:
        """Count feedback, optionally within [start, end]."""
        pass

    @abstractmethod
    async def find_by_user(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Feedback]:
        """List a user's feedback, newest first."""
        pass

    @abstractmethod
    async def count_by_user(self, user_id: UserId) -> int:
        """Count a user's feedback."""
        pass

    @abstractmethod
    async def save(self, feedback: Feedback) -> Feedback:
        """Insert feedback."""
        pass

    @abstractmethod
    async def delete(self, feedback_id: FeedbackId) -> bool:
        """Delete feedback. Returns True if a row was deleted."""
        pass
