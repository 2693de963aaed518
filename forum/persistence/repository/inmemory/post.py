"""In-memory post repository for testing."""

from datetime import datetime
from typing import Any, Optional, Sequence

from forum.domain.model.post import Post
from forum.domain.repository.post import PostRepository
from forum.domain.value import (
    CommentId,
    PostId,
    PostSortField,
    SearchSort,
    SortOrder,
    UserId,
)


def _matches(post: Post, needle: str) -> tuple[bool, bool, bool]:
    return (
        needle in post.title.lower(),
        any(needle in tag for tag in post.tags),
        needle in post.content.lower(),
    )


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    def _update(self, post_id: PostId, **changes: Any) -> Optional[Post]:
        post = self._posts.get(post_id)
        if post is None:
            return None
        updated = post.model_copy(update=changes)
        self._posts[post_id] = updated
        return updated

    def _search(self, query: str) -> list[Post]:
        needle = query.lower()
        return [p for p in self._posts.values() if any(_matches(p, needle))]

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_by_ids(self, post_ids: Sequence[PostId]) -> list[Post]:
        return [self._posts[i] for i in post_ids if i in self._posts]

    async def find_all(
        self,
        sort_by: PostSortField = PostSortField.CREATED_AT,
        order: SortOrder = SortOrder.DESC,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with ordering and pagination."""
        posts = sorted(
            self._posts.values(),
            key=lambda p: getattr(p, sort_by.value),
            reverse=order == SortOrder.DESC,
        )
        return posts[offset : offset + limit]

    async def count(self) -> int:
        return len(self._posts)

    async def find_by_author(
        self, author_id: UserId, limit: int = 20, offset: int = 0
    ) -> list[Post]:
        """Find posts by a specific author."""
        posts = [p for p in self._posts.values() if p.author_id == author_id]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts[offset : offset + limit]

    async def count_by_author(self, author_id: UserId) -> int:
        return sum(1 for p in self._posts.values() if p.author_id == author_id)

    async def find_by_authors(
        self, author_ids: Sequence[UserId], limit: int = 10
    ) -> list[Post]:
        wanted = set(author_ids)
        posts = [p for p in self._posts.values() if p.author_id in wanted]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts[:limit]

    async def search(
        self,
        query: str,
        sort: SearchSort = SearchSort.RELEVANCE,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Post]:
        """Case-insensitive search across title, content and tags."""
        needle = query.lower()
        posts = self._search(query)

        # Stable sorts: secondary key first
        posts.sort(key=lambda p: p.created_at, reverse=True)
        if sort == SearchSort.POPULAR:
            posts.sort(key=lambda p: p.upvotes, reverse=True)
        elif sort == SearchSort.RELEVANCE:
            posts.sort(key=lambda p: _matches(p, needle).index(True))

        return posts[offset : offset + limit]

    async def count_search(self, query: str) -> int:
        return len(self._search(query))

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post."""
        return self._posts.pop(post_id, None) is not None

    async def update_content(
        self, post_id: PostId, title: str | None, content: str | None
    ) -> Optional[Post]:
        changes: dict[str, Any] = {"updated_at": datetime.now()}
        if title is not None:
            changes["title"] = title
        if content is not None:
            changes["content"] = content
        return self._update(post_id, **changes)

    async def increment_view_count(self, post_id: PostId) -> Optional[Post]:
        post = self._posts.get(post_id)
        if post is None:
            return None
        return self._update(post_id, view_count=post.view_count + 1)

    async def adjust_votes(
        self, post_id: PostId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[Post]:
        post = self._posts.get(post_id)
        if post is None:
            return None
        return self._update(
            post_id,
            upvotes=max(post.upvotes + upvotes_delta, 0),
            downvotes=max(post.downvotes + downvotes_delta, 0),
        )

    async def add_comment_id(
        self, post_id: PostId, comment_id: CommentId
    ) -> Optional[Post]:
        post = self._posts.get(post_id)
        if post is None:
            return None
        if comment_id in post.comment_ids:
            return post
        return self._update(post_id, comment_ids=[*post.comment_ids, comment_id])

    async def remove_comment_id(
        self, post_id: PostId, comment_id: CommentId
    ) -> Optional[Post]:
        post = self._posts.get(post_id)
        if post is None:
            return None
        remaining = [i for i in post.comment_ids if i != comment_id]
        return self._update(post_id, comment_ids=remaining)

    async def clear_comment_ids(self, post_id: PostId) -> None:
        self._update(post_id, comment_ids=[])

    async def toggle_pinned(self, post_id: PostId) -> Optional[Post]:
        post = self._posts.get(post_id)
        if post is None:
            return None
        return self._update(
            post_id, is_pinned=not post.is_pinned, updated_at=datetime.now()
        )

    async def toggle_locked(self, post_id: PostId) -> Optional[Post]:
        post = self._posts.get(post_id)
        if post is None:
            return None
        return self._update(
            post_id, is_locked=not post.is_locked, updated_at=datetime.now()
        )
