"""In-memory user repository for testing."""

from datetime import datetime
from typing import Any, Optional, Sequence

from forum.domain.model.user import User
from forum.domain.repository.user import UserRepository
from forum.domain.value import CommentId, PostId, UserId, UserRole


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    def _update(self, user_id: UserId, **changes: Any) -> Optional[User]:
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(update={**changes, "updated_at": datetime.now()})
        self._users[user_id] = updated
        return updated

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        return [self._users[i] for i in user_ids if i in self._users]

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, ignoring case."""
        needle = email.strip().lower()
        for user in self._users.values():
            if user.email.lower() == needle:
                return user
        return None

    async def find_all(self, limit: int = 20, offset: int = 0) -> list[User]:
        users = sorted(self._users.values(), key=lambda u: u.joined_at, reverse=True)
        return users[offset : offset + limit]

    async def count(self, role: Optional[UserRole] = None) -> int:
        if role is None:
            return len(self._users)
        return sum(1 for u in self._users.values() if u.role == role)

    async def save(self, user: User) -> User:
        """Save a user."""
        self._users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> bool:
        return self._users.pop(user_id, None) is not None

    async def update_profile(
        self,
        user_id: UserId,
        name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Optional[User]:
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if avatar_url is not None:
            changes["avatar_url"] = avatar_url
        return self._update(user_id, **changes)

    async def set_role(self, user_id: UserId, role: UserRole) -> Optional[User]:
        return self._update(user_id, role=role)

    async def add_post_id(self, user_id: UserId, post_id: PostId) -> None:
        user = self._users.get(user_id)
        if user and post_id not in user.post_ids:
            self._update(user_id, post_ids=[*user.post_ids, post_id])

    async def remove_post_id(self, user_id: UserId, post_id: PostId) -> None:
        user = self._users.get(user_id)
        if user:
            self._update(user_id, post_ids=[i for i in user.post_ids if i != post_id])

    async def add_comment_id(self, user_id: UserId, comment_id: CommentId) -> None:
        user = self._users.get(user_id)
        if user and comment_id not in user.comment_ids:
            self._update(user_id, comment_ids=[*user.comment_ids, comment_id])

    async def remove_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> None:
        user = self._users.get(user_id)
        if user:
            removed = set(comment_ids)
            self._update(
                user_id,
                comment_ids=[i for i in user.comment_ids if i not in removed],
            )
