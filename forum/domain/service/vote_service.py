"""Vote domain service."""

from datetime import datetime
from typing import Sequence
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.domain.cache import VoteCache
from forum.domain.error import ContentDeletedException
from forum.domain.model.vote import Vote
from forum.domain.repository import VoteRepository
from forum.domain.value import (
    CommentId,
    PageRequest,
    PostId,
    UserId,
    VotableType,
    VoteAction,
    VoteValue,
    make_vote_id,
)

from .base import Service
from .comment_service import CommentService
from .post_service import PostService

# (previous value, requested direction) -> (new value, action)
TRANSITIONS: dict[tuple[VoteValue, VoteValue], tuple[VoteValue, VoteAction]] = {
    (VoteValue.NEUTRAL, VoteValue.UP): (VoteValue.UP, VoteAction.UPVOTED),
    (VoteValue.UP, VoteValue.UP): (VoteValue.NEUTRAL, VoteAction.REMOVED_UPVOTE),
    (VoteValue.DOWN, VoteValue.UP): (VoteValue.UP, VoteAction.CHANGED_TO_UPVOTE),
    (VoteValue.NEUTRAL, VoteValue.DOWN): (VoteValue.DOWN, VoteAction.DOWNVOTED),
    (VoteValue.DOWN, VoteValue.DOWN): (VoteValue.NEUTRAL, VoteAction.REMOVED_DOWNVOTE),
    (VoteValue.UP, VoteValue.DOWN): (VoteValue.DOWN, VoteAction.CHANGED_TO_DOWNVOTE),
}


def counter_deltas(previous: VoteValue, new: VoteValue) -> tuple[int, int]:
    """Changes to (upvotes, downvotes) when a vote goes from one value to another."""

    def counts(value: VoteValue) -> tuple[int, int]:
        return int(value == VoteValue.UP), int(value == VoteValue.DOWN)

    (prev_up, prev_down), (new_up, new_down) = counts(previous), counts(new)
    return new_up - prev_up, new_down - prev_down


class VoteOutcome(BaseModel):
    """Result of a vote transition and the target's counters after it."""

    success: bool = True
    action: VoteAction
    previous_vote: int
    new_vote: int
    upvotes: int
    downvotes: int


class VoteService(Service):
    """Domain service for vote operations.

    A user holds at most one vote per post or comment. Voting the same way
    twice withdraws the vote, voting the other way flips it. A withdrawn
    vote is deleted rather than stored as zero.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        vote_cache: VoteCache,
        post_service: PostService,
        comment_service: CommentService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            vote_cache: Cache of vote entities
            post_service: Post domain service
            comment_service: Comment domain service
        """
        self.vote_repository = vote_repository
        self.vote_cache = vote_cache
        self.post_service = post_service
        self.comment_service = comment_service

    async def upvote(
        self, target_type: VotableType, target_id: UUID, user_id: UserId
    ) -> VoteOutcome:
        """Upvote a post or comment, or withdraw an existing upvote.

        Raises:
            NotFoundError: If the target doesn't exist
            ContentDeletedException: If the target is a deleted comment
        """
        return await self._cast(target_type, target_id, user_id, VoteValue.UP)

    async def downvote(
        self, target_type: VotableType, target_id: UUID, user_id: UserId
    ) -> VoteOutcome:
        """Downvote a post or comment, or withdraw an existing downvote.

        Raises:
            NotFoundError: If the target doesn't exist
            ContentDeletedException: If the target is a deleted comment
        """
        return await self._cast(target_type, target_id, user_id, VoteValue.DOWN)

    async def remove_vote(
        self, target_type: VotableType, target_id: UUID, user_id: UserId
    ) -> VoteOutcome:
        """Withdraw whatever vote the user holds on a target.

        Raises:
            NotFoundError: If the target doesn't exist
        """
        with logfire.span(
            "vote_service.remove_vote",
            target_type=target_type.value,
            target_id=str(target_id),
            user_id=str(user_id),
        ):
            upvotes, downvotes = await self._counters(target_type, target_id)
            vote_id = make_vote_id(target_id, user_id)
            existing = await self.vote_repository.find_by_id(vote_id)
            previous = existing.value if existing else VoteValue.NEUTRAL

            if previous == VoteValue.NEUTRAL:
                if existing:
                    await self.vote_repository.delete(vote_id)
                    await self.vote_cache.invalidate(vote_id)
                logfire.info("No vote to remove", vote_id=vote_id)
                return VoteOutcome(
                    action=VoteAction.NO_CHANGE,
                    previous_vote=0,
                    new_vote=0,
                    upvotes=upvotes,
                    downvotes=downvotes,
                )

            await self.vote_repository.delete(vote_id)
            await self.vote_cache.invalidate(vote_id)
            upvotes, downvotes = await self._apply(
                target_type, target_id, *counter_deltas(previous, VoteValue.NEUTRAL)
            )
            logfire.info("Vote removed", vote_id=vote_id, previous=int(previous))
            return VoteOutcome(
                action=VoteAction.REMOVED_VOTE,
                previous_vote=int(previous),
                new_vote=0,
                upvotes=upvotes,
                downvotes=downvotes,
            )

    async def get_user_vote(
        self, target_type: VotableType, target_id: UUID, user_id: UserId
    ) -> int:
        """Return the user's vote on a target: 1, -1, or 0 when none."""
        vote_id = make_vote_id(target_id, user_id)
        vote = await self.vote_cache.fetch(
            vote_id, lambda: self.vote_repository.find_by_id(vote_id)
        )
        if not vote or vote.votable_type != target_type:
            return 0
        return int(vote.value)

    async def list_votes_by_user(
        self, user_id: UserId, page: PageRequest
    ) -> tuple[list[Vote], int]:
        """List a user's votes, most recently changed first."""
        with logfire.span("vote_service.list_votes_by_user", user_id=str(user_id)):
            votes = await self.vote_repository.find_by_user(
                user_id, limit=page.limit, offset=page.offset
            )
            return votes, await self.vote_repository.count_by_user(user_id)

    async def list_votes_by_target(
        self, target_type: VotableType, target_id: UUID, page: PageRequest
    ) -> tuple[list[Vote], int]:
        """List the votes on a target, most recently changed first."""
        with logfire.span(
            "vote_service.list_votes_by_target",
            target_type=target_type.value,
            target_id=str(target_id),
        ):
            votes = await self.vote_repository.find_by_votable(
                target_type, target_id, limit=page.limit, offset=page.offset
            )
            total = await self.vote_repository.count_by_votable(target_type, target_id)
            return votes, total

    async def delete_votes_for(
        self, target_type: VotableType, target_ids: Sequence[UUID]
    ) -> int:
        """Delete every vote on the given targets (cascade helper).

        Returns:
            Number of votes deleted
        """
        if not target_ids:
            return 0
        with logfire.span(
            "vote_service.delete_votes_for",
            target_type=target_type.value,
            targets=len(target_ids),
        ):
            vote_ids = await self.vote_repository.delete_by_votables(
                target_type, target_ids
            )
            await self.vote_cache.invalidate(*vote_ids)
            logfire.info(
                "Votes deleted", target_type=target_type.value, count=len(vote_ids)
            )
            return len(vote_ids)

    async def _cast(
        self,
        target_type: VotableType,
        target_id: UUID,
        user_id: UserId,
        direction: VoteValue,
    ) -> VoteOutcome:
        with logfire.span(
            "vote_service.cast",
            target_type=target_type.value,
            target_id=str(target_id),
            user_id=str(user_id),
            direction=int(direction),
        ):
            await self._counters(target_type, target_id)

            vote_id = make_vote_id(target_id, user_id)
            existing = await self.vote_repository.find_by_id(vote_id)
            previous = existing.value if existing else VoteValue.NEUTRAL
            new, action = TRANSITIONS[(previous, direction)]

            now = datetime.now()
            vote = Vote(
                id=vote_id,
                user_id=user_id,
                votable_type=target_type,
                votable_id=target_id,
                value=new,
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            saved = await self.vote_repository.save(vote)
            await self.vote_cache.set(saved)

            upvotes, downvotes = await self._apply(
                target_type, target_id, *counter_deltas(previous, new)
            )
            logfire.info(
                "Vote cast",
                vote_id=vote_id,
                action=action.value,
                previous=int(previous),
                new=int(new),
            )
            return VoteOutcome(
                action=action,
                previous_vote=int(previous),
                new_vote=int(new),
                upvotes=upvotes,
                downvotes=downvotes,
            )

    async def _counters(
        self, target_type: VotableType, target_id: UUID
    ) -> tuple[int, int]:
        """Load a votable target and return its counters.

        Raises:
            NotFoundError: If the target doesn't exist
            ContentDeletedException: If the target is a deleted comment
        """
        if target_type == VotableType.POST:
            post = await self.post_service.get_by_id(PostId(target_id))
            return post.upvotes, post.downvotes

        comment = await self.comment_service.get_by_id(CommentId(target_id))
        if comment.is_deleted:
            raise ContentDeletedException("comment", str(target_id))
        return comment.upvotes, comment.downvotes

    async def _apply(
        self,
        target_type: VotableType,
        target_id: UUID,
        upvotes_delta: int,
        downvotes_delta: int,
    ) -> tuple[int, int]:
        if target_type == VotableType.POST:
            post = await self.post_service.apply_vote_delta(
                PostId(target_id), upvotes_delta, downvotes_delta
            )
            return post.upvotes, post.downvotes

        comment = await self.comment_service.apply_vote_delta(
            CommentId(target_id), upvotes_delta, downvotes_delta
        )
        return comment.upvotes, comment.downvotes
