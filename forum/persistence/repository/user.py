"""PostgreSQL implementation of User repository."""

from typing import Any, List, Optional, Sequence

from sqlalchemy import case, cast, delete, desc, func, select, update
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import CommentId, PostId, UserId, UserRole
from forum.persistence.mappers import row_to_user, user_to_dict
from forum.persistence.tables import users_table


def _append_unique(column: Any, value: Any) -> Any:
    """``column || value`` unless the array already holds the value."""
    return case(
        (column.any(value), column),
        else_=func.array_append(column, cast(value, UUID), type_=ARRAY(UUID)),
    )


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _update(self, user_id: UserId, **values: Any) -> None:
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(updated_at=func.now(), **values)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users in one query."""
        if not user_ids:
            return []

        stmt = select(users_table).where(users_table.c.id.in_(list(user_ids)))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email, ignoring case.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(
            func.lower(users_table.c.email) == email.strip().lower()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_all(self, limit: int = 20, offset: int = 0) -> List[User]:
        """List users, newest first."""
        stmt = (
            select(users_table)
            .order_by(desc(users_table.c.joined_at), desc(users_table.c.id))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def count(self, role: Optional[UserRole] = None) -> int:
        """Count users, optionally only those with the given role."""
        stmt = select(func.count()).select_from(users_table)
        if role is not None:
            stmt = stmt.where(users_table.c.role == role.value)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)
        user_dict = user_to_dict(user)

        if existing:
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user."""
        stmt = delete(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def update_profile(
        self,
        user_id: UserId,
        name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Optional[User]:
        """Update name and avatar in place, without touching role or id lists."""
        values: dict[str, Any] = {"updated_at": func.now()}
        if name is not None:
            values["name"] = name
        if avatar_url is not None:
            values["avatar_url"] = avatar_url

        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(**values)
            .returning(users_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_user(dict(row)) if row else None

    async def set_role(self, user_id: UserId, role: UserRole) -> Optional[User]:
        """Change a user's role."""
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(role=role.value, updated_at=func.now())
            .returning(users_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_user(dict(row)) if row else None

    async def add_post_id(self, user_id: UserId, post_id: PostId) -> None:
        """Append a post ID to ``post_ids`` unless already present."""
        await self._update(
            user_id, post_ids=_append_unique(users_table.c.post_ids, post_id)
        )

    async def remove_post_id(self, user_id: UserId, post_id: PostId) -> None:
        """Remove a post ID from ``post_ids``."""
        await self._update(
            user_id,
            post_ids=func.array_remove(
                users_table.c.post_ids, cast(post_id, UUID), type_=ARRAY(UUID)
            ),
        )

    async def add_comment_id(self, user_id: UserId, comment_id: CommentId) -> None:
        """Append a comment ID to ``comment_ids`` unless already present."""
        await self._update(
            user_id, comment_ids=_append_unique(users_table.c.comment_ids, comment_id)
        )

    async def remove_comment_ids(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> None:
        """Remove comment IDs from ``comment_ids``."""
        if not comment_ids:
            return

        remaining: Any = users_table.c.comment_ids
        for comment_id in comment_ids:
            remaining = func.array_remove(
                remaining, cast(comment_id, UUID), type_=ARRAY(UUID)
            )
        await self._update(user_id, comment_ids=remaining)
