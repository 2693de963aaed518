"""User domain service."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

import logfire
from pydantic import BaseModel

from forum.domain.cache import UserCache
from forum.domain.error import (
    BusinessRuleViolationError,
    NotFoundError,
    UserBannedError,
)
from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import CommentId, PageRequest, PostId, UserId, UserRole

from .base import Service
from .search_service import PrefixSearchService


class UserStats(BaseModel):
    """Head counts for the admin dashboard."""

    total: int
    banned: int
    admins: int
    active: int


class UserService(Service):
    """Domain service for user operations.

    Reads go through the user cache. Writes invalidate the cached entry, and
    name changes are mirrored into the user prefix tree.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        user_cache: UserCache,
        search_service: PrefixSearchService,
    ) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            user_cache: Cache of user entities
            search_service: Prefix search index
        """
        self.user_repository = user_repository
        self.user_cache = user_cache
        self.search_service = search_service

    async def register(
        self, name: str, email: str, avatar_url: Optional[str] = None
    ) -> User:
        """Create a user, or return the existing one with the same email.

        Args:
            name: Display name
            email: Email address (unique, case-insensitive)
            avatar_url: Avatar image URL

        Returns:
            The new or existing user
        """
        with logfire.span("user_service.register", email=email):
            existing = await self.user_repository.find_by_email(email)
            if existing:
                logfire.info("User already registered", user_id=str(existing.id))
                return existing

            now = datetime.now()
            user = User(
                id=UserId(uuid4()),
                name=name.strip(),
                email=email.strip().lower(),
                avatar_url=avatar_url,
                joined_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            await self.user_cache.set(saved)
            await self.search_service.index_user(saved)
            logfire.info("User registered", user_id=str(saved.id))
            return saved

    async def get_user_by_id(self, user_id: UserId) -> User | None:
        """Get a user by ID through the cache.

        Args:
            user_id: User ID

        Returns:
            User if found, None otherwise
        """
        with logfire.span("user_service.get_user_by_id", user_id=str(user_id)):
            return await self.user_cache.fetch(
                user_id, lambda: self.user_repository.find_by_id(user_id)
            )

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.get_user_by_id(user_id)
        if not user:
            logfire.warn("User not found", user_id=str(user_id))
            raise NotFoundError("User", str(user_id))
        return user

    async def get_contributor(self, user_id: UserId) -> User:
        """Get a user who is about to create content.

        Raises:
            NotFoundError: If user not found
            UserBannedError: If the user is banned
        """
        user = await self.get_by_id(user_id)
        if user.is_banned:
            logfire.warn("Banned user tried to contribute", user_id=str(user_id))
            raise UserBannedError(str(user_id))
        return user

    async def get_users_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Get several users, in the order given, skipping unknown IDs."""
        with logfire.span("user_service.get_users_by_ids", count=len(user_ids)):
            return await self.user_cache.fetch_many(
                user_ids, self.user_repository.find_by_ids
            )

    async def update_user(
        self,
        user_id: UserId,
        name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> User:
        """Update a user's profile.

        Args:
            user_id: User ID
            name: New display name (trimmed)
            avatar_url: New avatar URL

        Returns:
            Updated user

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.update_user", user_id=str(user_id)):
            current = await self.user_repository.find_by_id(user_id)
            if not current:
                raise NotFoundError("User", str(user_id))

            fresh = await self.user_repository.update_profile(
                user_id,
                name=name.strip() if name is not None else None,
                avatar_url=avatar_url,
            )
            await self.user_cache.invalidate(user_id)
            if not fresh:
                raise NotFoundError("User", str(user_id))

            if fresh.name != current.name:
                await self.search_service.update_user_index(current, fresh)
            logfire.info(
                "User updated", user_id=str(user_id), renamed=fresh.name != current.name
            )
            return fresh

    async def add_post(self, user_id: UserId, post_id: PostId) -> None:
        await self.user_repository.add_post_id(user_id, post_id)
        await self.user_cache.invalidate(user_id)

    async def remove_post(self, user_id: UserId, post_id: PostId) -> None:
        await self.user_repository.remove_post_id(user_id, post_id)
        await self.user_cache.invalidate(user_id)

    async def add_comment(self, user_id: UserId, comment_id: CommentId) -> None:
        await self.user_repository.add_comment_id(user_id, comment_id)
        await self.user_cache.invalidate(user_id)

    async def remove_comments(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> None:
        if not comment_ids:
            return
        await self.user_repository.remove_comment_ids(user_id, comment_ids)
        await self.user_cache.invalidate(user_id)

    async def toggle_ban(self, user_id: UserId) -> User:
        """Ban an active user or lift the ban of a banned one.

        Raises:
            NotFoundError: If user not found
            BusinessRuleViolationError: If the user is an admin
        """
        with logfire.span("user_service.toggle_ban", user_id=str(user_id)):
            user = await self.get_by_id(user_id)
            if user.is_admin:
                raise BusinessRuleViolationError("Admins cannot be banned")

            role = UserRole.USER if user.is_banned else UserRole.BANNED_USER
            updated = await self.user_repository.set_role(user_id, role)
            await self.user_cache.invalidate(user_id)
            if not updated:
                raise NotFoundError("User", str(user_id))
            logfire.info("User ban toggled", user_id=str(user_id), role=role.value)
            return updated

    async def list_users(self, page: PageRequest) -> tuple[list[User], int]:
        """List users, newest first, with the total count."""
        with logfire.span("user_service.list_users", page=page.page):
            users = await self.user_repository.find_all(
                limit=page.limit, offset=page.offset
            )
            return users, await self.user_repository.count()

    async def get_user_stats(self) -> UserStats:
        with logfire.span("user_service.get_user_stats"):
            total = await self.user_repository.count()
            banned = await self.user_repository.count(role=UserRole.BANNED_USER)
            admins = await self.user_repository.count(role=UserRole.ADMIN)
            return UserStats(
                total=total, banned=banned, admins=admins, active=total - banned
            )

    async def delete_user(self, user_id: UserId) -> bool:
        """Delete a user row and drop it from the cache and the index.

        Returns:
            True if the user existed
        """
        with logfire.span("user_service.delete_user", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                return False
            deleted = await self.user_repository.delete(user_id)
            await self.user_cache.invalidate(user_id)
            await self.search_service.remove_user_index(user)
            logfire.info("User deleted", user_id=str(user_id))
            return deleted
