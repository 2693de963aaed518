"""User aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, PostId, UserId, UserRole


class User(DomainModel):
    """User aggregate root.

    ``post_ids`` and ``comment_ids`` are denormalized lists of the content the
    user authored, kept in creation order.
    """

    id: UserId
    name: str = Field(min_length=2, max_length=100)
    email: str = Field(min_length=3, max_length=255)
    role: UserRole = UserRole.USER
    avatar_url: Optional[str] = None
    post_ids: list[PostId] = Field(default_factory=list)
    comment_ids: list[CommentId] = Field(default_factory=list)
    joined_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_banned(self) -> bool:
        return self.role.is_banned
