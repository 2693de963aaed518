"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from forum.domain.model.post import Post
from forum.domain.value import (
    CommentId,
    PostId,
    PostSortField,
    SearchSort,
    SortOrder,
    UserId,
)


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, post_ids: Sequence[PostId]) -> List[Post]:
        """Find several posts in one query.

        Args:
            post_ids: IDs to look up

        Returns:
            The posts that exist, in no particular order
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        sort_by: PostSortField = PostSortField.CREATED_AT,
        order: SortOrder = SortOrder.DESC,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with ordering and pagination.

        Args:
            sort_by: Column to order by
            order: Sort direction
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all posts."""
        pass

    @abstractmethod
    async def find_by_author(
        self, author_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Post]:
        """Find posts by a specific author, newest first.

        Args:
            author_id: The author's user ID
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts by the author
        """
        pass

    @abstractmethod
    async def count_by_author(self, author_id: UserId) -> int:
        """Count posts by a specific author."""
        pass

    @abstractmethod
    async def find_by_authors(
        self, author_ids: Sequence[UserId], limit: int = 10
    ) -> List[Post]:
        """Find the most recent posts written by any of the given authors.

        Args:
            author_ids: Author user IDs
            limit: Maximum number of posts to return

        Returns:
            Posts, newest first
        """
        pass

    @abstractmethod
    async def search(
        self,
        query: str,
        sort: SearchSort = SearchSort.RELEVANCE,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        """Case-insensitive search across title, content and tags.

        Relevance ranks title matches above tag matches above content
        matches, newest first within a rank.

        Args:
            query: Text to look for
            sort: Result ordering
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            Matching posts
        """
        pass

    @abstractmethod
    async def count_search(self, query: str) -> int:
        """Count posts matching a search query."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete).

        Args:
            post_id: The post ID to delete

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def update_content(
        self, post_id: PostId, title: str | None, content: str | None
    ) -> Optional[Post]:
        """Update the editable fields of a post.

        Fields passed as None are left unchanged.

        Args:
            post_id: ID of the post to update
            title: New title
            content: New content

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def increment_view_count(self, post_id: PostId) -> Optional[Post]:
        """Atomically increment the view counter.

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def adjust_votes(
        self, post_id: PostId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[Post]:
        """Atomically add deltas to the vote counters (floored at 0).

        Args:
            post_id: The post ID
            upvotes_delta: Change to apply to upvotes
            downvotes_delta: Change to apply to downvotes

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def add_comment_id(
        self, post_id: PostId, comment_id: CommentId
    ) -> Optional[Post]:
        """Append a comment ID to ``comment_ids`` unless already present.

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def remove_comment_id(
        self, post_id: PostId, comment_id: CommentId
    ) -> Optional[Post]:
        """Remove a comment ID from ``comment_ids``.

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def clear_comment_ids(self, post_id: PostId) -> None:
        """Empty ``comment_ids``."""
        pass

    @abstractmethod
    async def toggle_pinned(self, post_id: PostId) -> Optional[Post]:
        """Flip ``is_pinned``.

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def toggle_locked(self, post_id: PostId) -> Optional[Post]:
        """Flip ``is_locked``.

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass
