"""Read-through caches for domain entities and listings."""

from .entity import CommentCache, EntityCache, PostCache, UserCache, VoteCache
from .feed import FeedCache, FeedPage, FeedQuery
from .store import CacheStore

__all__ = [
    "CacheStore",
    "CommentCache",
    "EntityCache",
    "FeedCache",
    "FeedPage",
    "FeedQuery",
    "PostCache",
    "UserCache",
    "VoteCache",
]
