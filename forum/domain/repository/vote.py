"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from forum.domain.model.vote import Vote
from forum.domain.value import UserId, VotableType, VoteId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, vote_id: VoteId) -> Optional[Vote]:
        """Find a vote by its composite ID.

        Args:
            vote_id: ``"{votable_id}_{user_id}"``

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a vote or overwrite the value of an existing one.

        Args:
            vote: The vote to save

        Returns:
            The saved vote
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote.

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def find_by_user(
        self, user_id: UserId, limit: int = 20, offset: int = 0
    ) -> List[Vote]:
        """Find a user's non-neutral votes, most recently updated first.

        Args:
            user_id: The voter
            limit: Maximum number of votes to return
            offset: Number of votes to skip

        Returns:
            List of votes with a value other than 0
        """
        pass

    @abstractmethod
    async def count_by_user(self, user_id: UserId) -> int:
        """Count a user's non-neutral votes."""
        pass

    @abstractmethod
    async def find_by_votable(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Vote]:
        """Find the non-neutral votes on an item, most recently updated first.

        Args:
            votable_type: Type of item (post or comment)
            votable_id: ID of the item
            limit: Maximum number of votes to return
            offset: Number of votes to skip

        Returns:
            List of votes with a value other than 0
        """
        pass

    @abstractmethod
    async def count_by_votable(
        self, votable_type: VotableType, votable_id: UUID
    ) -> int:
        """Count the non-neutral votes on an item."""
        pass

    @abstractmethod
    async def delete_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> List[VoteId]:
        """Delete every vote on the given items.

        Returns:
            IDs of the deleted votes
        """
        pass
