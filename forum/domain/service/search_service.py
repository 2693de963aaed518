"""Prefix search domain service.

Keeps the ``posts``, ``users`` and ``tags`` prefix trees in step with the
database and answers autocomplete queries from them.
"""

import time
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from forum.config import SearchSettings
from forum.domain.cache.store import CacheStore
from forum.domain.model import Post, User
from forum.domain.repository import PostRepository, UserRepository
from forum.domain.search import PrefixTree, SearchIndexState
from forum.domain.value import AutocompleteType, PostSortField, SortOrder, UserId

from .base import Service

MAX_TITLE_LENGTH = 200
MAX_CONTENT_LENGTH = 500
PREVIEW_LENGTH = 100
USER_PAGE_SIZE = 500


class AutocompleteResults(BaseModel):
    """Grouped autocomplete hits."""

    posts: list[dict[str, Any]] = Field(default_factory=list)
    users: list[dict[str, Any]] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    total: int = 0


class AutocompleteOutcome(BaseModel):
    """Autocomplete answer, including why it may be empty."""

    success: bool = True
    index_ready: bool
    is_building: bool = False
    query: Optional[str] = None
    results: AutocompleteResults = Field(default_factory=AutocompleteResults)
    message: Optional[str] = None
    error: Optional[str] = None


class TagSuggestion(BaseModel):
    tag: str
    count: int


class RebuildResult(BaseModel):
    """Outcome of a full index rebuild."""

    success: bool
    message: Optional[str] = None
    posts_indexed: int = 0
    users_indexed: int = 0
    successful: int = 0
    failed: int = 0
    duration_ms: int = 0


def searchable_post_text(post: Post) -> str:
    title = post.title[:MAX_TITLE_LENGTH]
    content = post.content[:MAX_CONTENT_LENGTH]
    return f"{title} {content}".strip()


def post_metadata(post: Post) -> dict[str, Any]:
    return {
        "type": "post",
        "post_id": str(post.id),
        "title": post.title,
        "content": post.content[:PREVIEW_LENGTH],
        "user_id": str(post.author_id),
        "upvotes": post.upvotes,
        "created_at": post.created_at.isoformat(),
    }


def user_metadata(user: User) -> dict[str, Any]:
    return {
        "type": "user",
        "user_id": str(user.id),
        "name": user.name,
        "avatar_url": user.avatar_url,
        "joined_at": user.joined_at.isoformat(),
    }


class PrefixSearchService(Service):
    """Domain service for the autocomplete index."""

    def __init__(
        self,
        store: CacheStore,
        state: SearchIndexState,
        post_repository: PostRepository,
        user_repository: UserRepository,
        settings: SearchSettings,
    ) -> None:
        """Initialize prefix search service.

        Args:
            store: Cache store holding the prefix trees
            state: Process-wide index readiness
            post_repository: Post repository (rebuilds and author matches)
            user_repository: User repository (rebuilds)
            settings: Search settings
        """
        self.posts_tree = PrefixTree(store, "posts")
        self.users_tree = PrefixTree(store, "users")
        self.tags_tree = PrefixTree(store, "tags")
        self.state = state
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.settings = settings

    @property
    def trees(self) -> tuple[PrefixTree, PrefixTree, PrefixTree]:
        return self.posts_tree, self.users_tree, self.tags_tree

    # Indexing

    async def index_post(self, post: Post) -> bool:
        """Index a post's title and content, and each of its tags.

        Returns:
            False if the post has no indexable text
        """
        with logfire.span("search_service.index_post", post_id=str(post.id)):
            text = searchable_post_text(post)
            if not text:
                logfire.warn("Post has no searchable content", post_id=str(post.id))
                return False

            indexed = await self.posts_tree.add(text, post_metadata(post))
            for tag in post.tags:
                await self.tags_tree.add(
                    tag, {"type": "tag", "tag": tag, "post_id": str(post.id)}
                )
            return indexed

    async def index_user(self, user: User) -> bool:
        """Index a user's display name.

        Returns:
            False if the name is blank or has no indexable words
        """
        with logfire.span("search_service.index_user", user_id=str(user.id)):
            if not user.name.strip():
                logfire.warn("User has no valid name", user_id=str(user.id))
                return False
            return await self.users_tree.add(user.name, user_metadata(user))

    async def remove_post_index(self, post: Post) -> None:
        with logfire.span("search_service.remove_post_index", post_id=str(post.id)):
            owner = {"post_id": str(post.id)}
            await self.posts_tree.remove(searchable_post_text(post), owner)
            for tag in post.tags:
                await self.tags_tree.remove(tag, owner)

    async def remove_user_index(self, user: User) -> None:
        with logfire.span("search_service.remove_user_index", user_id=str(user.id)):
            await self.users_tree.remove(user.name, {"user_id": str(user.id)})

    async def update_post_index(self, old: Post, new: Post) -> bool:
        """Replace the index entries of a post after an edit."""
        await self.remove_post_index(old)
        return await self.index_post(new)

    async def update_user_index(self, old: User, new: User) -> bool:
        """Replace the index entry of a user after a rename."""
        await self.remove_user_index(old)
        return await self.index_user(new)

    async def increment_post_score(self, text: str) -> int:
        with logfire.span("search_service.increment_post_score", text=text):
            return await self.posts_tree.increment_score(text, 1)

    async def increment_tag_score(self, tag: str) -> int:
        with logfire.span("search_service.increment_tag_score", tag=tag):
            return await self.tags_tree.increment_score(tag, 1)

    # Queries

    async def autocomplete(
        self,
        query: str,
        type: AutocompleteType = AutocompleteType.ALL,
        limit: int = 10,
    ) -> AutocompleteOutcome:
        """Suggest posts, users and tags for a partially typed query.

        Args:
            query: Partial text typed by the user
            type: Which trees to consult
            limit: Result size for users and tags (posts get twice as many)

        Returns:
            Grouped results, or an explanation when the index isn't usable
        """
        with logfire.span(
            "search_service.autocomplete", query=query, type=type.value, limit=limit
        ):
            if not self.state.ready:
                return AutocompleteOutcome(
                    success=False,
                    index_ready=False,
                    is_building=self.state.rebuilding,
                    query=query,
                    message=(
                        "Search index is building, please wait..."
                        if self.state.rebuilding
                        else "Search index not ready, use fallback search"
                    ),
                    error=self.state.error,
                )

            if len(query.strip()) < self.settings.min_query_length:
                return AutocompleteOutcome(
                    index_ready=True, query=query, message="Query too short"
                )

            want_posts = type in (AutocompleteType.ALL, AutocompleteType.POST)
            want_users = type in (AutocompleteType.ALL, AutocompleteType.USER)
            want_tags = type in (AutocompleteType.ALL, AutocompleteType.TAG)

            posts: dict[str, dict[str, Any]] = {}
            users: list[dict[str, Any]] = []
            tags: list[str] = []

            if want_posts:
                for completion in await self.posts_tree.search(query, limit * 2):
                    post_id = completion.metadata.get("post_id")
                    if post_id and post_id not in posts:
                        posts[post_id] = completion.metadata

            if want_users:
                completions = await self.users_tree.search(query, limit)
                users = [completion.metadata for completion in completions]

                if users and want_posts:
                    author_ids = [UserId(UUID(user["user_id"])) for user in users]
                    for post in await self.post_repository.find_by_authors(
                        author_ids, limit
                    ):
                        if str(post.id) not in posts:
                            posts[str(post.id)] = {
                                **post_metadata(post),
                                "matched_by": "author",
                            }

            if want_tags:
                for completion in await self.tags_tree.search(query, limit):
                    tag = completion.metadata.get("tag", completion.text)
                    if tag not in tags:
                        tags.append(tag)

            needle = query.strip().lower()
            ranked = sorted(
                posts.values(),
                key=lambda post: (
                    needle not in str(post.get("title", "")).lower(),
                    -int(post.get("upvotes") or 0),
                ),
            )

            results = AutocompleteResults(
                posts=ranked[: limit * 2],
                users=users[:limit],
                tags=tags[:limit],
                total=len(ranked) + len(users) + len(tags),
            )
            logfire.info("Autocomplete served", query=query, total=results.total)
            return AutocompleteOutcome(index_ready=True, query=query, results=results)

    async def get_tag_suggestions(
        self, query: str, limit: int = 10
    ) -> list[TagSuggestion]:
        """Suggest tags for a prefix, most used first."""
        with logfire.span("search_service.get_tag_suggestions", query=query):
            if not self.state.ready or not query.strip():
                return []

            counts: dict[str, int] = {}
            for completion in await self.tags_tree.search(
                query, limit * 2, unique=False
            ):
                tag = completion.metadata.get("tag", completion.text)
                counts[tag] = counts.get(tag, 0) + 1

            ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
            return [
                TagSuggestion(tag=tag, count=count) for tag, count in ranked[:limit]
            ]

    async def get_index_stats(self) -> dict[str, Any]:
        with logfire.span("search_service.get_index_stats"):
            posts, users, tags = [await tree.stats() for tree in self.trees]
            total_keys = posts["total_keys"] + users["total_keys"] + tags["total_keys"]
            return {
                "is_ready": self.state.ready,
                "is_rebuilding": self.state.rebuilding,
                "error": self.state.error,
                "last_rebuilt_at": self.state.last_rebuilt_at,
                "posts": posts,
                "users": users,
                "tags": tags,
                "total_keys": total_keys,
                "estimated_memory_mb": round(total_keys * 0.001, 2),
            }

    # Maintenance

    async def rebuild_index(self) -> RebuildResult:
        """Drop every tree and re-index recent posts and all users.

        Only one rebuild runs at a time in the process; a concurrent call
        returns immediately without touching the index.

        Raises:
            Exception: Whatever the database raised; the error is recorded
                on the index state before propagating
        """
        if self.state.rebuilding or self.state.lock.locked():
            logfire.info("Rebuild already in progress, skipping")
            return RebuildResult(success=False, message="Rebuild already in progress")

        async with self.state.lock:
            self.state.rebuilding = True
            self.state.ready = False
            self.state.error = None
            started = time.monotonic()
            try:
                with logfire.span("search_service.rebuild_index"):
                    for tree in self.trees:
                        await tree.clear()

                    posts = await self.post_repository.find_all(
                        sort_by=PostSortField.CREATED_AT,
                        order=SortOrder.DESC,
                        limit=self.settings.rebuild_post_limit,
                    )
                    users = await self._all_users()

                    outcomes = [await self.index_post(post) for post in posts]
                    outcomes += [await self.index_user(user) for user in users]
                    successful = sum(1 for ok in outcomes if ok)

                    duration_ms = int((time.monotonic() - started) * 1000)
                    self.state.mark_ready()
                    self.state.last_rebuilt_at = datetime.now()
                    logfire.info(
                        "Search index rebuilt",
                        posts=len(posts),
                        users=len(users),
                        successful=successful,
                        failed=len(outcomes) - successful,
                        duration_ms=duration_ms,
                    )
                    return RebuildResult(
                        success=True,
                        posts_indexed=len(posts),
                        users_indexed=len(users),
                        successful=successful,
                        failed=len(outcomes) - successful,
                        duration_ms=duration_ms,
                    )
            except Exception as e:
                logfire.error("Search index rebuild failed", error=str(e))
                self.state.mark_failed(str(e))
                raise
            finally:
                self.state.rebuilding = False

    async def initialize_if_needed(self) -> None:
        """Make the index usable at startup, rebuilding it only when empty.

        Failures are recorded on the index state rather than raised, so a
        broken index never prevents the API from serving.
        """
        with logfire.span("search_service.initialize_if_needed"):
            try:
                if not await self.posts_tree.is_empty():
                    logfire.info("Search index already populated")
                    self.state.mark_ready()
                    return
                if not self.settings.rebuild_on_startup:
                    logfire.info("Search index empty, startup rebuild disabled")
                    self.state.mark_ready()
                    return
                logfire.info("Building search index in background")
                await self.rebuild_index()
            except Exception as e:
                logfire.error("Search index initialization failed", error=str(e))
                self.state.mark_failed(str(e))

    async def _all_users(self) -> list[User]:
        users: list[User] = []
        offset = 0
        while True:
            page = await self.user_repository.find_all(
                limit=USER_PAGE_SIZE, offset=offset
            )
            users.extend(page)
            if len(page) < USER_PAGE_SIZE:
                return users
            offset += USER_PAGE_SIZE
