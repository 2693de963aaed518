"""PostgreSQL implementation of Feedback repository."""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Feedback
from forum.domain.repository import FeedbackRepository
from forum.domain.value import FeedbackId, UserId
from forum.persistence.mappers import feedback_to_dict, row_to_feedback
from forum.persistence.tables import feedback_table


def _date_range(start: Optional[datetime], end: Optional[datetime]) -> list[Any]:
    conditions = []
    if start is not None:
        conditions.append(feedback_table.c.created_at >= start)
    if end is not None:
        conditions.append(feedback_table.c.created_at <= end)
    return conditions


class PostgresFeedbackRepository(FeedbackRepository):
    """PostgreSQL implementation of FeedbackRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, feedback_id: FeedbackId) -> Optional[Feedback]:
        stmt = select(feedback_table).where(feedback_table.c.id == feedback_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_feedback(row._asdict()) if row else None

    async def find_all(
        self,
        limit: int = 20,
        offset: int = 0,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Feedback]:
        stmt = (
            select(feedback_table)
            .where(*_date_range(start, end))
            .order_by(desc(feedback_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_feedback(row._asdict()) for row in result.fetchall()]

    async def count(
        self, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(feedback_table)
            .where(*_date_range(start, end))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_user(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Feedback]:
        stmt = (
            select(feedback_table)
            .where(feedback_table.c.user_id == user_id)
            .order_by(desc(feedback_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_feedback(row._asdict()) for row in result.fetchall()]

    async def count_by_user(self, user_id: UserId) -> int:
        stmt = (
            select(func.count())
            .select_from(feedback_table)
            .where(feedback_table.c.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, feedback: Feedback) -> Feedback:
        stmt = feedback_table.insert().values(**feedback_to_dict(feedback))
        await self.session.execute(stmt)
        await self.session.flush()
        return feedback

    async def delete(self, feedback_id: FeedbackId) -> bool:
        stmt = delete(feedback_table).where(feedback_table.c.id == feedback_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
