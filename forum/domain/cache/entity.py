"""Per-entity JSON caches on top of a cache store."""

from typing import (
    Any,
    Awaitable,
    Callable,
    ClassVar,
    Generic,
    Iterable,
    Optional,
    Sequence,
    TypeVar,
)

import logfire
from pydantic import ValidationError

from forum.domain.model import Comment, Post, User, Vote
from forum.domain.model.common import DomainModel

from .store import CacheStore

ModelT = TypeVar("ModelT", bound=DomainModel)


class EntityCache(Generic[ModelT]):
    """Cache of domain models stored as JSON under ``"{namespace}:{id}"``.

    Subclasses pin the namespace and the model type. Every entry expires after
    the TTL given at construction.
    """

    namespace: ClassVar[str]
    model: ClassVar[type[DomainModel]]

    def __init__(self, store: CacheStore, ttl: int) -> None:
        self.store = store
        self.ttl = ttl

    def key(self, entity_id: object) -> str:
        return f"{self.namespace}:{entity_id}"

    @staticmethod
    def _id_of(entity: Any) -> str:
        return str(entity.id)

    def _decode(self, key: str, raw: Optional[str]) -> Optional[ModelT]:
        if raw is None:
            return None
        try:
            return self.model.model_validate_json(raw)  # type: ignore[return-value]
        except ValidationError:
            logfire.warn("Dropping undecodable cache entry", key=key)
            return None

    async def get(self, entity_id: object) -> Optional[ModelT]:
        """Return the cached entity, or None on a miss."""
        key = self.key(entity_id)
        entity = self._decode(key, await self.store.get(key))
        if entity is None:
            logfire.debug("Cache miss", key=key)
        return entity

    async def get_many(self, entity_ids: Sequence[object]) -> dict[str, ModelT]:
        """Return the cached entities keyed by ``str(id)``; misses are absent."""
        if not entity_ids:
            return {}
        keys = [self.key(entity_id) for entity_id in entity_ids]
        values = await self.store.get_many(keys)
        hits: dict[str, ModelT] = {}
        for entity_id, key, raw in zip(entity_ids, keys, values):
            entity = self._decode(key, raw)
            if entity is not None:
                hits[str(entity_id)] = entity
        return hits

    async def set(self, entity: ModelT) -> bool:
        key = self.key(self._id_of(entity))
        return await self.store.set(key, entity.model_dump_json(), ttl=self.ttl)

    async def set_many(self, entities: Iterable[ModelT]) -> bool:
        mapping = {
            self.key(self._id_of(entity)): entity.model_dump_json()
            for entity in entities
        }
        if not mapping:
            return True
        return await self.store.set_many(mapping, ttl=self.ttl)

    async def refresh(self, entity: ModelT) -> bool:
        """Overwrite the entry only if one is already cached.

        Used for in-place counter and list updates, which must not populate
        the cache with an entity nobody has read.
        """
        if not await self.store.exists(self.key(self._id_of(entity))):
            return False
        return await self.set(entity)

    async def invalidate(self, *entity_ids: object) -> int:
        if not entity_ids:
            return 0
        keys = [self.key(entity_id) for entity_id in entity_ids]
        return await self.store.delete(*keys)

    async def fetch(
        self,
        entity_id: object,
        loader: Callable[[], Awaitable[Optional[ModelT]]],
    ) -> Optional[ModelT]:
        """Cache-aside read of one entity.

        Args:
            entity_id: ID of the entity
            loader: Loads the entity from the database on a miss

        Returns:
            The entity, or None if the loader found nothing
        """
        cached = await self.get(entity_id)
        if cached is not None:
            return cached
        entity = await loader()
        if entity is not None:
            await self.set(entity)
        return entity

    async def fetch_many(
        self,
        entity_ids: Sequence[Any],
        loader: Callable[[list[Any]], Awaitable[list[ModelT]]],
    ) -> list[ModelT]:
        """Cache-aside read of several entities with one database query.

        Args:
            entity_ids: IDs in the order the caller wants them back
            loader: Loads a list of missing IDs from the database

        Returns:
            Entities in the order of ``entity_ids``; IDs that no longer exist
            are skipped
        """
        found = await self.get_many(entity_ids)
        missing = [entity_id for entity_id in entity_ids if str(entity_id) not in found]
        if missing:
            loaded = await loader(missing)
            await self.set_many(loaded)
            found.update({self._id_of(entity): entity for entity in loaded})
            logfire.debug(
                "Batch cache fill",
                namespace=self.namespace,
                hits=len(entity_ids) - len(missing),
                loaded=len(loaded),
            )
        return [
            found[str(entity_id)] for entity_id in entity_ids if str(entity_id) in found
        ]

    async def clear(self) -> int:
        """Remove every entry in this namespace."""
        removed = await self.store.delete_pattern(f"{self.namespace}:*")
        logfire.info(
            "Cache namespace cleared", namespace=self.namespace, removed=removed
        )
        return removed


class UserCache(EntityCache[User]):
    namespace = "users"
    model = User


class PostCache(EntityCache[Post]):
    namespace = "posts"
    model = Post


class CommentCache(EntityCache[Comment]):
    namespace = "comments"
    model = Comment


class VoteCache(EntityCache[Vote]):
    namespace = "vote"
    model = Vote
