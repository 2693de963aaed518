"""In-memory vote repository for testing."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from forum.domain.model.vote import Vote
from forum.domain.repository.vote import VoteRepository
from forum.domain.value import UserId, VotableType, VoteId, VoteValue


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[VoteId, Vote] = {}

    def _cast(self) -> list[Vote]:
        votes = [v for v in self._votes.values() if v.value != VoteValue.NEUTRAL]
        return sorted(votes, key=lambda v: v.updated_at, reverse=True)

    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by ID."""
        return self._votes.get(vote_id)

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote, or overwrite the value of the existing one."""
        existing = self._votes.get(vote.id)
        if existing is not None:
            vote = existing.model_copy(
                update={"value": vote.value, "updated_at": datetime.now()}
            )
        self._votes[vote.id] = vote
        return vote

    async def delete(self, vote_id: VoteId) -> bool:
        return self._votes.pop(vote_id, None) is not None

    async def find_by_user(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> list[Vote]:
        votes = [v for v in self._cast() if v.user_id == user_id]
        return votes[offset : offset + limit]

    async def count_by_user(self, user_id: UserId) -> int:
        return sum(1 for v in self._cast() if v.user_id == user_id)

    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Vote]:
        votes = [
            v
            for v in self._cast()
            if v.votable_type == votable_type and v.votable_id == votable_id
        ]
        return votes[offset : offset + limit]

    async def count_by_votable(
        self, votable_type: VotableType, votable_id: UUID
    ) -> int:
        return sum(
            1
            for v in self._cast()
            if v.votable_type == votable_type and v.votable_id == votable_id
        )

    async def delete_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> list[VoteId]:
        targets = set(votable_ids)
        doomed = [
            vote_id
            for vote_id, vote in self._votes.items()
            if vote.votable_type == votable_type and vote.votable_id in targets
        ]
        for vote_id in doomed:
            del self._votes[vote_id]
        return doomed
