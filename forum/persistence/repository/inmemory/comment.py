"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Any, Optional, Sequence

from forum.domain.model.comment import DELETED_CONTENT, Comment
from forum.domain.repository.comment import CommentRepository
from forum.domain.value import CommentId, PostId, UserId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    def _update(self, comment_id: CommentId, **changes: Any) -> Optional[Comment]:
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        updated = comment.model_copy(update=changes)
        self._comments[comment_id] = updated
        return updated

    def _live(self) -> list[Comment]:
        return [c for c in self._comments.values() if not c.is_deleted]

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> list[Comment]:
        return [self._comments[i] for i in comment_ids if i in self._comments]

    async def find_by_post(self, post_id: PostId) -> list[Comment]:
        comments = [c for c in self._comments.values() if c.post_id == post_id]
        return sorted(comments, key=lambda c: c.created_at)

    async def find_top_level_by_post(
        self, post_id: PostId, limit: int = 20, offset: int = 0
    ) -> list[Comment]:
        comments = [
            c for c in self._live() if c.post_id == post_id and c.parent_id is None
        ]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments[offset : offset + limit]

    async def count_live_by_post(self, post_id: PostId) -> int:
        return sum(1 for c in self._live() if c.post_id == post_id)

    async def count_top_level_by_post(self, post_id: PostId) -> int:
        return sum(
            1
            for c in self._live()
            if c.post_id == post_id and c.parent_id is None
        )

    async def find_replies(
        self, parent_id: CommentId, limit: int = 20, offset: int = 0
    ) -> list[Comment]:
        replies = [c for c in self._live() if c.parent_id == parent_id]
        replies.sort(key=lambda c: c.created_at)
        return replies[offset : offset + limit]

    async def count_replies(self, parent_id: CommentId) -> int:
        return sum(1 for c in self._live() if c.parent_id == parent_id)

    async def count_all_replies(self, parent_id: CommentId) -> int:
        return sum(1 for c in self._comments.values() if c.parent_id == parent_id)

    async def find_by_author(
        self, author_id: UserId, limit: int = 20, offset: int = 0
    ) -> list[Comment]:
        comments = [c for c in self._live() if c.author_id == author_id]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return comments[offset : offset + limit]

    async def count_by_author(self, author_id: UserId) -> int:
        return sum(1 for c in self._live() if c.author_id == author_id)

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self._comments[comment.id] = comment
        return comment

    async def delete(self, comment_id: CommentId) -> bool:
        return self._comments.pop(comment_id, None) is not None

    async def delete_by_post(self, post_id: PostId) -> int:
        doomed = [i for i, c in self._comments.items() if c.post_id == post_id]
        for comment_id in doomed:
            del self._comments[comment_id]
        return len(doomed)

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        comment = self._comments.get(comment_id)
        if comment is None or comment.is_deleted:
            return None
        return self._update(
            comment_id, content=content, is_edited=True, updated_at=datetime.now()
        )

    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        return self._update(
            comment_id,
            content=DELETED_CONTENT,
            is_deleted=True,
            updated_at=datetime.now(),
        )

    async def adjust_votes(
        self, comment_id: CommentId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[Comment]:
        comment = self._comments.get(comment_id)
        if comment is None:
            return None
        return self._update(
            comment_id,
            upvotes=max(comment.upvotes + upvotes_delta, 0),
            downvotes=max(comment.downvotes + downvotes_delta, 0),
        )
