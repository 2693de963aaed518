"""Post domain service."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from forum.domain.cache import FeedCache, FeedPage, FeedQuery, PostCache
from forum.domain.error import NotFoundError, ValidationError
from forum.domain.model import Post, User
from forum.domain.repository import PostRepository
from forum.domain.value import (
    CommentId,
    PageRequest,
    PostId,
    PostSortField,
    SearchSort,
    SortOrder,
    UserId,
)

from .base import Service
from .search_service import PrefixSearchService
from .user_service import UserService


class PostService(Service):
    """Domain service for post operations.

    Owns three denormalized views of a post besides its row: the cached
    entity, the cached feed pages and the prefix index. Every write keeps
    them in step, sequentially and without a transaction spanning them.
    """

    def __init__(
        self,
        post_repository: PostRepository,
        post_cache: PostCache,
        feed_cache: FeedCache,
        user_service: UserService,
        search_service: PrefixSearchService,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            post_cache: Cache of post entities
            feed_cache: Cache of post listing pages
            user_service: User domain service (author post lists)
            search_service: Prefix search index
        """
        self.post_repository = post_repository
        self.post_cache = post_cache
        self.feed_cache = feed_cache
        self.user_service = user_service
        self.search_service = search_service

    async def create_post(
        self,
        author: User,
        title: str,
        content: str,
        tags: Optional[list[str]] = None,
        media: Optional[list[str]] = None,
    ) -> Post:
        """Create a post and register it everywhere it is denormalized.

        Args:
            author: Author of the post
            title: Post title
            content: Post body
            tags: Tags (normalized by the model)
            media: Media URLs

        Returns:
            Created post
        """
        with logfire.span(
            "post_service.create_post", author_id=str(author.id), title=title
        ):
            now = datetime.now()
            post = Post(
                id=PostId(uuid4()),
                author_id=author.id,
                title=title,
                content=content,
                tags=tags or [],
                media=media or [],
                created_at=now,
                updated_at=now,
            )
            saved = await self.post_repository.save(post)

            await self.post_cache.set(saved)
            await self.user_service.add_post(author.id, saved.id)
            await self.search_service.index_post(saved)
            await self.feed_cache.invalidate()

            logfire.info("Post created", post_id=str(saved.id), tags=saved.tags)
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID through the cache.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_cache.fetch(
                post_id, lambda: self.post_repository.find_by_id(post_id)
            )
            if not post:
                logfire.warn("Post not found", post_id=str(post_id))
            return post

    async def get_by_id(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: If post not found
        """
        post = await self.get_post_by_id(post_id)
        if not post:
            raise NotFoundError("Post", str(post_id))
        return post

    async def view_post(self, post_id: PostId) -> Post:
        """Read a post and count the view.

        The counter is incremented in the database; a cached copy is patched
        in place. Feed pages are left alone and catch up on expiry.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.view_post", post_id=str(post_id)):
            await self.get_by_id(post_id)
            updated = await self.post_repository.increment_view_count(post_id)
            if not updated:
                raise NotFoundError("Post", str(post_id))
            await self.post_cache.refresh(updated)
            return updated

    async def list_posts(
        self,
        page: PageRequest,
        sort_by: PostSortField = PostSortField.CREATED_AT,
        order: SortOrder = SortOrder.DESC,
    ) -> tuple[list[Post], int]:
        """List a page of posts with the total post count.

        Pages are cached as id lists; bodies are resolved through the post
        cache so a hit only queries posts that were evicted.
        """
        with logfire.span(
            "post_service.list_posts",
            page=page.page,
            limit=page.limit,
            sort_by=sort_by.value,
            order=order.value,
        ):
            query = FeedQuery(sort_by=sort_by, order=order, page=page)
            cached = await self.feed_cache.get_page(query)
            if cached is not None:
                posts = await self.post_cache.fetch_many(
                    cached.post_ids, self.post_repository.find_by_ids
                )
                logfire.info("Feed page served from cache", key=query.key)
                return posts, cached.total

            posts = await self.post_repository.find_all(
                sort_by=sort_by, order=order, limit=page.limit, offset=page.offset
            )
            total = await self.post_repository.count()
            await self.post_cache.set_many(posts)
            await self.feed_cache.set_page(
                query, FeedPage(post_ids=[post.id for post in posts], total=total)
            )
            logfire.info("Feed page loaded", key=query.key, count=len(posts))
            return posts, total

    async def list_posts_by_user(
        self, user_id: UserId, page: PageRequest
    ) -> tuple[list[Post], int]:
        """List a user's posts, newest first.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span(
            "post_service.list_posts_by_user", user_id=str(user_id), page=page.page
        ):
            user = await self.user_service.get_by_id(user_id)
            if user.post_ids:
                newest_first = list(reversed(user.post_ids))
                posts = await self.post_cache.fetch_many(
                    page.slice(newest_first), self.post_repository.find_by_ids
                )
                return posts, len(newest_first)

            posts = await self.post_repository.find_by_author(
                user_id, limit=page.limit, offset=page.offset
            )
            await self.post_cache.set_many(posts)
            return posts, await self.post_repository.count_by_author(user_id)

    async def search_posts(
        self,
        query: str,
        page: PageRequest,
        sort: SearchSort = SearchSort.RELEVANCE,
    ) -> tuple[list[Post], int]:
        """Full-text search over title, content and tags."""
        with logfire.span(
            "post_service.search_posts", query=query, sort=sort.value, page=page.page
        ):
            posts = await self.post_repository.search(
                query, sort=sort, limit=page.limit, offset=page.offset
            )
            total = await self.post_repository.count_search(query)
            await self.post_cache.set_many(posts)
            logfire.info("Posts searched", query=query, total=total)
            return posts, total

    async def update_post(
        self,
        post_id: PostId,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Post:
        """Edit a post's title and/or content.

        Raises:
            ValidationError: If neither field is given
            NotFoundError: If post not found
        """
        with logfire.span("post_service.update_post", post_id=str(post_id)):
            if title is None and content is None:
                raise ValidationError("Nothing to update: provide a title or content")

            old = await self.get_by_id(post_id)
            updated = await self.post_repository.update_content(
                post_id, title, content
            )
            if not updated:
                raise NotFoundError("Post", str(post_id))

            await self.post_cache.invalidate(post_id)
            await self.search_service.update_post_index(old, updated)
            await self.feed_cache.invalidate()

            logfire.info(
                "Post updated",
                post_id=str(post_id),
                title_changed=title is not None,
                content_changed=content is not None,
            )
            return updated

    async def apply_vote_delta(
        self, post_id: PostId, upvotes_delta: int, downvotes_delta: int
    ) -> Post:
        """Shift a post's vote counters.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span(
            "post_service.apply_vote_delta",
            post_id=str(post_id),
            upvotes_delta=upvotes_delta,
            downvotes_delta=downvotes_delta,
        ):
            updated = await self.post_repository.adjust_votes(
                post_id, upvotes_delta, downvotes_delta
            )
            if not updated:
                raise NotFoundError("Post", str(post_id))
            await self.post_cache.invalidate(post_id)
            await self.feed_cache.invalidate()
            return updated

    async def add_comment(self, post_id: PostId, comment_id: CommentId) -> None:
        updated = await self.post_repository.add_comment_id(post_id, comment_id)
        if updated:
            await self.post_cache.refresh(updated)

    async def remove_comment(self, post_id: PostId, comment_id: CommentId) -> None:
        updated = await self.post_repository.remove_comment_id(post_id, comment_id)
        if updated:
            await self.post_cache.refresh(updated)

    async def clear_comments(self, post_id: PostId) -> None:
        await self.post_repository.clear_comment_ids(post_id)
        await self.post_cache.invalidate(post_id)

    async def toggle_pin(self, post_id: PostId) -> Post:
        """Pin or unpin a post.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.toggle_pin", post_id=str(post_id)):
            updated = await self.post_repository.toggle_pinned(post_id)
            if not updated:
                raise NotFoundError("Post", str(post_id))
            await self.post_cache.invalidate(post_id)
            await self.feed_cache.invalidate()
            logfire.info(
                "Post pin toggled", post_id=str(post_id), pinned=updated.is_pinned
            )
            return updated

    async def toggle_lock(self, post_id: PostId) -> Post:
        """Lock or unlock a post for new comments.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.toggle_lock", post_id=str(post_id)):
            updated = await self.post_repository.toggle_locked(post_id)
            if not updated:
                raise NotFoundError("Post", str(post_id))
            await self.post_cache.invalidate(post_id)
            await self.feed_cache.invalidate()
            logfire.info(
                "Post lock toggled", post_id=str(post_id), locked=updated.is_locked
            )
            return updated

    async def delete_post(self, post: Post) -> bool:
        """Delete a post row and every denormalized copy of it.

        Comments and votes on the post are removed by the caller first.

        Returns:
            True if the row existed
        """
        with logfire.span("post_service.delete_post", post_id=str(post.id)):
            deleted = await self.post_repository.delete(post.id)
            await self.post_cache.invalidate(post.id)
            await self.user_service.remove_post(post.author_id, post.id)
            await self.search_service.remove_post_index(post)
            await self.feed_cache.invalidate()
            logfire.info("Post deleted", post_id=str(post.id), existed=deleted)
            return deleted

    async def count_posts(self) -> int:
        return await self.post_repository.count()
