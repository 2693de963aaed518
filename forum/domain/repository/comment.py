"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId, PostId, UserId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find several comments in one query (any order)."""
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find every comment on a post, deleted ones included.

        Used by cascades that need the full set of rows.
        """
        pass

    @abstractmethod
    async def find_top_level_by_post(
        self, post_id: PostId, limit: int = 20, offset: int = 0
    ) -> List[Comment]:
        """Find live top-level comments on a post, newest first.

        Args:
            post_id: The post's ID
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments without a parent that are not deleted
        """
        pass

    @abstractmethod
    async def count_live_by_post(self, post_id: PostId) -> int:
        """Count the non-deleted comments on a post."""
        pass

    @abstractmethod
    async def count_top_level_by_post(self, post_id: PostId) -> int:
        """Count the live comments on a post that have no parent."""
        pass

    @abstractmethod
    async def find_replies(
        self, parent_id: CommentId, limit: int = 20, offset: int = 0
    ) -> List[Comment]:
        """Find live direct replies to a comment, oldest first.

        Args:
            parent_id: The parent comment's ID
            limit: Maximum number of replies to return
            offset: Number of replies to skip

        Returns:
            List of replies that are not deleted
        """
        pass

    @abstractmethod
    async def count_replies(self, parent_id: CommentId) -> int:
        """Count live direct replies to a comment."""
        pass

    @abstractmethod
    async def count_all_replies(self, parent_id: CommentId) -> int:
        """Count every direct reply row, soft-deleted ones included."""
        pass

    @abstractmethod
    async def find_by_author(
        self, author_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Comment]:
        """Find live comments by an author, newest first."""
        pass

    @abstractmethod
    async def count_by_author(self, author_id: UserId) -> int:
        """Count live comments by an author."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment row.

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every comment on a post.

        Returns:
            Number of rows deleted
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace the content of a live comment and mark it edited.

        Returns:
            Updated comment, or None if missing or deleted
        """
        pass

    @abstractmethod
    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment deleted and blank its content.

        Returns:
            Updated comment, or None if missing
        """
        pass

    @abstractmethod
    async def adjust_votes(
        self, comment_id: CommentId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[Comment]:
        """Atomically add deltas to the vote counters (floored at 0).

        Returns:
            Updated comment, or None if missing
        """
        pass
