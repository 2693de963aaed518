"""Cast vote use case."""

from enum import Enum
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.common import VoteResponse
from forum.domain.service import UserService, VoteService
from forum.domain.value import UserId, VotableType


class VoteDirection(str, Enum):
    """What the voter asked for."""

    UP = "up"
    DOWN = "down"
    REMOVE = "remove"


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    votable_type: VotableType
    votable_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    direction: VoteDirection


class CastVoteUseCase:
    """Use case for upvoting, downvoting or withdrawing a vote.

    Voting the same way twice withdraws the vote; voting the other way
    switches it.
    """

    def __init__(self, vote_service: VoteService, user_service: UserService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            user_service: User domain service
        """
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: CastVoteRequest) -> VoteResponse:
        """Execute cast vote flow.

        Raises:
            NotFoundError: If the voter or the target doesn't exist
            UserBannedError: If the voter is banned
            ContentDeletedException: If the target is a deleted comment
        """
        with logfire.span(
            "cast_vote.execute",
            votable_type=request.votable_type.value,
            votable_id=request.votable_id,
            direction=request.direction.value,
        ):
            voter = await self.user_service.get_contributor(
                UserId(UUID(request.user_id))
            )
            target_id = UUID(request.votable_id)

            if request.direction == VoteDirection.UP:
                outcome = await self.vote_service.upvote(
                    request.votable_type, target_id, voter.id
                )
            elif request.direction == VoteDirection.DOWN:
                outcome = await self.vote_service.downvote(
                    request.votable_type, target_id, voter.id
                )
            else:
                outcome = await self.vote_service.remove_vote(
                    request.votable_type, target_id, voter.id
                )

            return VoteResponse.from_outcome(outcome)
