"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from forum.domain.model.user import User
from forum.domain.value import CommentId, PostId, UserId, UserRole


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users in one query (any order)."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email address (case-insensitive).

        Args:
            email: Email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 20, offset: int = 0) -> List[User]:
        """List users, newest first."""
        pass

    @abstractmethod
    async def count(self, role: Optional[UserRole] = None) -> int:
        """Count users, optionally only those with the given role."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a user.

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def update_profile(
        self,
        user_id: UserId,
        name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Optional[User]:
        """Change the profile fields that are given, leaving the rest alone.

        Returns:
            Updated user, or None if missing
        """
        pass

    @abstractmethod
    async def set_role(self, user_id: UserId, role: UserRole) -> Optional[User]:
        """Change a user's role.

        Returns:
            Updated user, or None if the user doesn't exist
        """
        pass

    @abstractmethod
    async def add_post_id(self, user_id: UserId, post_id: PostId) -> None:
        """Append a post ID to ``post_ids`` unless already present."""
        pass

    @abstractmethod
    async def remove_post_id(self, user_id: UserId, post_id: PostId) -> None:
        """Remove a post ID from ``post_ids``."""
        pass

    @abstractmethod
    async def add_comment_id(self, user_id: UserId, comment_id: CommentId) -> None:
        """Append a comment ID to ``comment_ids`` unless already present."""
        pass

    @abstractmethod
    async def remove_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> None:
        """Remove comment IDs from ``comment_ids``."""
        pass
