"""PostgreSQL implementation of Comment repository."""

from typing import Any, List, Optional, Sequence

import logfire
from sqlalchemy import asc, delete, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Comment
from forum.domain.model.comment import DELETED_CONTENT
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId, PostId, UserId
from forum.persistence.mappers import comment_to_dict, row_to_comment
from forum.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_many(self, stmt: Any) -> List[Comment]:
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def _count(self, *conditions: Any) -> int:
        stmt = select(func.count()).select_from(comments_table).where(*conditions)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def _update_returning(self, stmt: Any) -> Optional[Comment]:
        result = await self.session.execute(stmt.returning(comments_table))
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_ids(self, comment_ids: Sequence[CommentId]) -> List[Comment]:
        """Find several comments in one query."""
        if not comment_ids:
            return []

        stmt = select(comments_table).where(
            comments_table.c.id.in_(list(comment_ids))
        )
        return await self._fetch_many(stmt)

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find every comment on a post, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.post_id == post_id)
            .order_by(asc(comments_table.c.created_at))
        )
        return await self._fetch_many(stmt)

    async def find_top_level_by_post(
        self, post_id: PostId, limit: int = 20, offset: int = 0
    ) -> List[Comment]:
        """Find live top-level comments on a post, newest first."""
        stmt = (
            select(comments_table)
            .where(
                comments_table.c.post_id == post_id,
                comments_table.c.parent_id.is_(None),
                comments_table.c.is_deleted.is_(False),
            )
            .order_by(desc(comments_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch_many(stmt)

    async def count_live_by_post(self, post_id: PostId) -> int:
        """Count the non-deleted comments on a post."""
        return await self._count(
            comments_table.c.post_id == post_id,
            comments_table.c.is_deleted.is_(False),
        )

    async def count_top_level_by_post(self, post_id: PostId) -> int:
        """Count the live comments on a post that have no parent."""
        return await self._count(
            comments_table.c.post_id == post_id,
            comments_table.c.parent_id.is_(None),
            comments_table.c.is_deleted.is_(False),
        )

    async def find_replies(
        self, parent_id: CommentId, limit: int = 20, offset: int = 0
    ) -> List[Comment]:
        """Find live direct replies to a comment, oldest first."""
        stmt = (
            select(comments_table)
            .where(
                comments_table.c.parent_id == parent_id,
                comments_table.c.is_deleted.is_(False),
            )
            .order_by(asc(comments_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch_many(stmt)

    async def count_replies(self, parent_id: CommentId) -> int:
        """Count live direct replies to a comment."""
        return await self._count(
            comments_table.c.parent_id == parent_id,
            comments_table.c.is_deleted.is_(False),
        )

    async def count_all_replies(self, parent_id: CommentId) -> int:
        """Count every direct reply row, soft-deleted ones included."""
        return await self._count(comments_table.c.parent_id == parent_id)

    async def find_by_author(
        self, author_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Comment]:
        """Find live comments by an author, newest first."""
        stmt = (
            select(comments_table)
            .where(
                comments_table.c.author_id == author_id,
                comments_table.c.is_deleted.is_(False),
            )
            .order_by(desc(comments_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch_many(stmt)

    async def count_by_author(self, author_id: UserId) -> int:
        """Count live comments by an author."""
        return await self._count(
            comments_table.c.author_id == author_id,
            comments_table.c.is_deleted.is_(False),
        )

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        with logfire.span("comment_repository.save", comment_id=str(comment.id)):
            existing = await self.find_by_id(comment.id)
            comment_dict = comment_to_dict(comment)

            if existing:
                stmt = (
                    comments_table.update()
                    .where(comments_table.c.id == comment.id)
                    .values(**comment_dict)
                )
            else:
                logfire.info(
                    "Inserting new comment",
                    comment_id=str(comment.id),
                    post_id=str(comment.post_id),
                    parent_id=str(comment.parent_id) if comment.parent_id else None,
                )
                stmt = comments_table.insert().values(**comment_dict)

            await self.session.execute(stmt)
            await self.session.flush()
            return comment

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment row."""
        stmt = delete(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_post(self, post_id: PostId) -> int:
        """Delete every comment on a post."""
        with logfire.span("comment_repository.delete_by_post", post_id=str(post_id)):
            stmt = delete(comments_table).where(comments_table.c.post_id == post_id)
            result = await self.session.execute(stmt)
            await self.session.flush()
            deleted = result.rowcount  # type: ignore[attr-defined]
            logfire.info("Deleted comments", post_id=str(post_id), count=deleted)
            return deleted

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace the content of a live comment and mark it edited."""
        stmt = (
            update(comments_table)
            .where(
                comments_table.c.id == comment_id,
                comments_table.c.is_deleted.is_(False),
            )
            .values(content=content, is_edited=True, updated_at=func.now())
        )
        return await self._update_returning(stmt)

    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Mark a comment deleted and blank its content."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(content=DELETED_CONTENT, is_deleted=True, updated_at=func.now())
        )
        return await self._update_returning(stmt)

    async def adjust_votes(
        self, comment_id: CommentId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[Comment]:
        """Atomically add deltas to the vote counters (floored at 0)."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                upvotes=func.greatest(comments_table.c.upvotes + upvotes_delta, 0),
                downvotes=func.greatest(
                    comments_table.c.downvotes + downvotes_delta, 0
                ),
            )
        )
        return await self._update_returning(stmt)
