"""PostgreSQL implementation of Post repository."""

from typing import Any, List, Optional, Sequence

import logfire
from sqlalchemy import asc, case, cast, delete, desc, func, or_, select, update
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Post
from forum.domain.repository.post import PostRepository
from forum.domain.value import (
    CommentId,
    PostId,
    PostSortField,
    SearchSort,
    SortOrder,
    UserId,
)
from forum.persistence.mappers import post_to_dict, row_to_post
from forum.persistence.tables import posts_table

SORT_COLUMNS = {
    PostSortField.CREATED_AT: posts_table.c.created_at,
    PostSortField.UPDATED_AT: posts_table.c.updated_at,
    PostSortField.UPVOTES: posts_table.c.upvotes,
    PostSortField.VIEW_COUNT: posts_table.c.view_count,
}


def _pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_many(self, stmt: Any) -> List[Post]:
        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def _update_returning(self, post_id: PostId, **values: Any) -> Optional[Post]:
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(**values)
            .returning(posts_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()

        if row is None:
            logfire.warn("Post not found", post_id=str(post_id))
            return None
        return row_to_post(row._asdict())

    def _search_filter(self, query: str) -> Any:
        pattern = _pattern(query)
        return or_(
            posts_table.c.title.ilike(pattern),
            posts_table.c.content.ilike(pattern),
            func.array_to_string(posts_table.c.tags, " ").ilike(pattern),
        )

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.debug("Post not found", post_id=str(post_id))
                return None

            return row_to_post(row._asdict())

    async def find_by_ids(self, post_ids: Sequence[PostId]) -> List[Post]:
        """Find several posts in one query."""
        if not post_ids:
            return []

        with logfire.span("post_repository.find_by_ids", count=len(post_ids)):
            stmt = select(posts_table).where(posts_table.c.id.in_(list(post_ids)))
            return await self._fetch_many(stmt)

    async def find_all(
        self,
        sort_by: PostSortField = PostSortField.CREATED_AT,
        order: SortOrder = SortOrder.DESC,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with ordering and pagination."""
        with logfire.span(
            "post_repository.find_all",
            sort_by=sort_by.value,
            order=order.value,
            limit=limit,
            offset=offset,
        ):
            column = SORT_COLUMNS[sort_by]
            direction = desc if order == SortOrder.DESC else asc
            stmt = (
                select(posts_table)
                .order_by(direction(column), desc(posts_table.c.id))
                .limit(limit)
                .offset(offset)
            )
            posts = await self._fetch_many(stmt)
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(self) -> int:
        """Count all posts."""
        stmt = select(func.count()).select_from(posts_table)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_author(
        self, author_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Post]:
        """Find posts by a specific author."""
        stmt = (
            select(posts_table)
            .where(posts_table.c.author_id == author_id)
            .order_by(desc(posts_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch_many(stmt)

    async def count_by_author(self, author_id: UserId) -> int:
        """Count posts by a specific author."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.author_id == author_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_authors(
        self, author_ids: Sequence[UserId], limit: int = 10
    ) -> List[Post]:
        """Find the most recent posts written by any of the given authors."""
        if not author_ids:
            return []

        stmt = (
            select(posts_table)
            .where(posts_table.c.author_id.in_(list(author_ids)))
            .order_by(desc(posts_table.c.created_at))
            .limit(limit)
        )
        return await self._fetch_many(stmt)

    async def search(
        self,
        query: str,
        sort: SearchSort = SearchSort.RELEVANCE,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        """Case-insensitive search across title, content and tags."""
        with logfire.span(
            "post_repository.search", query=query, sort=sort.value, limit=limit
        ):
            pattern = _pattern(query)
            stmt = select(posts_table).where(self._search_filter(query))

            if sort == SearchSort.RECENT:
                stmt = stmt.order_by(desc(posts_table.c.created_at))
            elif sort == SearchSort.POPULAR:
                stmt = stmt.order_by(
                    desc(posts_table.c.upvotes), desc(posts_table.c.created_at)
                )
            else:
                rank = case(
                    (posts_table.c.title.ilike(pattern), 0),
                    (func.array_to_string(posts_table.c.tags, " ").ilike(pattern), 1),
                    else_=2,
                )
                stmt = stmt.order_by(rank, desc(posts_table.c.created_at))

            posts = await self._fetch_many(stmt.limit(limit).offset(offset))
            logfire.info("Search results", query=query, count=len(posts))
            return posts

    async def count_search(self, query: str) -> int:
        """Count posts matching a search query."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(self._search_filter(query))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        with logfire.span("post_repository.save", post_id=str(post.id)):
            existing = await self.find_by_id(post.id)
            post_dict = post_to_dict(post)

            if existing:
                logfire.info("Updating existing post", post_id=str(post.id))
                stmt = (
                    posts_table.update()
                    .where(posts_table.c.id == post.id)
                    .values(**post_dict)
                )
            else:
                logfire.info(
                    "Inserting new post",
                    post_id=str(post.id),
                    title=post.title,
                    tags=post.tags,
                )
                stmt = posts_table.insert().values(**post_dict)

            await self.session.execute(stmt)
            await self.session.flush()
            return post

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete)."""
        stmt = delete(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def update_content(
        self, post_id: PostId, title: str | None, content: str | None
    ) -> Optional[Post]:
        """Update the editable fields of a post."""
        with logfire.span("post_repository.update_content", post_id=str(post_id)):
            values: dict[str, Any] = {"updated_at": func.now()}
            if title is not None:
                values["title"] = title
            if content is not None:
                values["content"] = content
            return await self._update_returning(post_id, **values)

    async def increment_view_count(self, post_id: PostId) -> Optional[Post]:
        """Atomically increment the view counter."""
        return await self._update_returning(
            post_id, view_count=posts_table.c.view_count + 1
        )

    async def adjust_votes(
        self, post_id: PostId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[Post]:
        """Atomically add deltas to the vote counters (floored at 0)."""
        with logfire.span(
            "post_repository.adjust_votes",
            post_id=str(post_id),
            upvotes_delta=upvotes_delta,
            downvotes_delta=downvotes_delta,
        ):
            return await self._update_returning(
                post_id,
                upvotes=func.greatest(posts_table.c.upvotes + upvotes_delta, 0),
                downvotes=func.greatest(posts_table.c.downvotes + downvotes_delta, 0),
            )

    async def add_comment_id(
        self, post_id: PostId, comment_id: CommentId
    ) -> Optional[Post]:
        """Append a comment ID to ``comment_ids`` unless already present."""
        column = posts_table.c.comment_ids
        return await self._update_returning(
            post_id,
            comment_ids=case(
                (column.any(comment_id), column),
                else_=func.array_append(
                    column, cast(comment_id, UUID), type_=ARRAY(UUID)
                ),
            ),
        )

    async def remove_comment_id(
        self, post_id: PostId, comment_id: CommentId
    ) -> Optional[Post]:
        """Remove a comment ID from ``comment_ids``."""
        return await self._update_returning(
            post_id,
            comment_ids=func.array_remove(
                posts_table.c.comment_ids, cast(comment_id, UUID), type_=ARRAY(UUID)
            ),
        )

    async def clear_comment_ids(self, post_id: PostId) -> None:
        """Empty ``comment_ids``."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(comment_ids=[])
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def toggle_pinned(self, post_id: PostId) -> Optional[Post]:
        """Flip ``is_pinned``."""
        return await self._update_returning(
            post_id, is_pinned=~posts_table.c.is_pinned, updated_at=func.now()
        )

    async def toggle_locked(self, post_id: PostId) -> Optional[Post]:
        """Flip ``is_locked``."""
        return await self._update_returning(
            post_id, is_locked=~posts_table.c.is_locked, updated_at=func.now()
        )
