"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, desc, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Vote
from forum.domain.repository import VoteRepository
from forum.domain.value import UserId, VotableType, VoteId, VoteValue
from forum.persistence.mappers import row_to_vote, vote_to_dict
from forum.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        stmt = select(votes_table).where(votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote, or overwrite the value of the existing one."""
        vote_dict = vote_to_dict(vote)
        stmt = insert(votes_table).values(**vote_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[votes_table.c.id],
            set_={"value": stmt.excluded.value, "updated_at": func.now()},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def find_by_user(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Vote]:
        """Find a user's non-neutral votes, most recently updated first."""
        stmt = (
            select(votes_table)
            .where(
                votes_table.c.user_id == user_id,
                votes_table.c.value != int(VoteValue.NEUTRAL),
            )
            .order_by(desc(votes_table.c.updated_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def count_by_user(self, user_id: UserId) -> int:
        """Count a user's non-neutral votes."""
        stmt = (
            select(func.count())
            .select_from(votes_table)
            .where(
                votes_table.c.user_id == user_id,
                votes_table.c.value != int(VoteValue.NEUTRAL),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Vote]:
        """Find the non-neutral votes on an item, most recently updated first."""
        stmt = (
            select(votes_table)
            .where(
                and_(
                    votes_table.c.votable_type == votable_type.value,
                    votes_table.c.votable_id == votable_id,
                    votes_table.c.value != int(VoteValue.NEUTRAL),
                )
            )
            .order_by(desc(votes_table.c.updated_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def count_by_votable(
        self, votable_type: VotableType, votable_id: UUID
    ) -> int:
        """Count the non-neutral votes on an item."""
        stmt = (
            select(func.count())
            .select_from(votes_table)
            .where(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
                votes_table.c.value != int(VoteValue.NEUTRAL),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def delete_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> List[VoteId]:
        """Delete every vote on the given items."""
        if not votable_ids:
            return []

        stmt = (
            delete(votes_table)
            .where(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(list(votable_ids)),
            )
            .returning(votes_table.c.id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return [VoteId(row.id) for row in result.fetchall()]
