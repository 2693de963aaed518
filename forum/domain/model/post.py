"""Post aggregate root."""

from datetime import datetime

from pydantic import Field, field_validator

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, PostId, UserId

MAX_TAGS = 10


class Post(DomainModel):
    """A forum post.

    ``comment_ids`` is a denormalized copy of the ids of the post's live
    comments, newest last. It is maintained by the comment service and is not
    the source of truth for comment existence.
    """

    id: PostId
    author_id: UserId
    title: str = Field(min_length=5, max_length=200)
    content: str = Field(min_length=10)
    tags: list[str] = Field(default_factory=list)
    media: list[str] = Field(default_factory=list)
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    comment_ids: list[CommentId] = Field(default_factory=list)
    view_count: int = Field(default=0, ge=0)
    is_pinned: bool = False
    is_locked: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags: list[str]) -> list[str]:
        """Trim, lowercase and de-duplicate tags, keeping their order."""
        normalized: list[str] = []
        for tag in tags:
            value = tag.strip().lower()
            if value and value not in normalized:
                normalized.append(value)
        if len(normalized) > MAX_TAGS:
            raise ValueError(f"A post can have at most {MAX_TAGS} tags")
        return normalized

    @property
    def score(self) -> int:
        """Net vote score."""
        return self.upvotes - self.downvotes
