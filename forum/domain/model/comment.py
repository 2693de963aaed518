"""Comment entity.

Comments are threaded through ``parent_id``; a reply points at the comment
it answers and top-level comments have no parent.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, PostId, UserId

DELETED_CONTENT = "[deleted]"
MAX_COMMENT_LENGTH = 1000


class Comment(DomainModel):
    """Comment entity.

    Soft-deleted comments keep their row (so replies still have a parent)
    but their content is replaced by ``[deleted]``.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)
    parent_id: Optional[CommentId] = None
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    is_edited: bool = False
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
