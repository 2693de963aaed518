"""Feedback entity."""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import FeedbackId, UserId


class Feedback(DomainModel):
    """Free-text feedback about the forum left by a user."""

    id: FeedbackId
    user_id: UserId
    content: str = Field(min_length=10, max_length=2000)
    created_at: datetime = Field(default_factory=datetime.now)
