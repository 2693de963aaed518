"""Cache of post listing pages."""

from typing import Optional

import logfire
from pydantic import BaseModel

from forum.domain.value import PageRequest, PostId, PostSortField, SortOrder

from .store import CacheStore

FEED_PREFIX = "feed"


class FeedQuery(BaseModel):
    """Identifies one page of the post listing."""

    sort_by: PostSortField = PostSortField.CREATED_AT
    order: SortOrder = SortOrder.DESC
    page: PageRequest = PageRequest()

    @property
    def key(self) -> str:
        return (
            f"{FEED_PREFIX}:{self.sort_by.value}:{self.order.value}"
            f":{self.page.page}:{self.page.limit}"
        )


class FeedPage(BaseModel):
    """Ordered post ids of a listing page and the total number of posts."""

    post_ids: list[PostId]
    total: int


class FeedCache:
    """Stores feed pages as id lists; post bodies live in the post cache."""

    def __init__(self, store: CacheStore, ttl: int) -> None:
        self.store = store
        self.ttl = ttl

    async def get_page(self, query: FeedQuery) -> Optional[FeedPage]:
        raw = await self.store.get(query.key)
        if raw is None:
            return None
        try:
            return FeedPage.model_validate_json(raw)
        except ValueError:
            logfire.warn("Dropping undecodable feed page", key=query.key)
            await self.store.delete(query.key)
            return None

    async def set_page(self, query: FeedQuery, page: FeedPage) -> bool:
        return await self.store.set(query.key, page.model_dump_json(), ttl=self.ttl)

    async def invalidate(self) -> int:
        """Drop every cached feed page."""
        removed = await self.store.delete_pattern(f"{FEED_PREFIX}:*")
        logfire.debug("Feed cache invalidated", removed=removed)
        return removed
