"""Vote read use cases."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import PagedRequest, VotePage, VoteView
from forum.domain.service import VoteService
from forum.domain.value import Pagination, UserId, VotableType


class GetUserVoteRequest(BaseModel):
    votable_type: VotableType
    votable_id: str
    user_id: str  # User ID from authenticated user


class GetUserVoteResponse(BaseModel):
    votable_id: str
    vote: int  # 1, -1, or 0 when the user hasn't voted


class ListTargetVotesRequest(PagedRequest):
    votable_type: VotableType
    votable_id: str


class ListUserVotesRequest(PagedRequest):
    user_id: str


class GetUserVoteUseCase:
    """Use case for a user's own vote on a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetUserVoteRequest) -> GetUserVoteResponse:
        vote = await self.vote_service.get_user_vote(
            request.votable_type,
            UUID(request.votable_id),
            UserId(UUID(request.user_id)),
        )
        return GetUserVoteResponse(votable_id=request.votable_id, vote=vote)


class ListTargetVotesUseCase:
    """Use case for the votes cast on a post or comment."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: ListTargetVotesRequest) -> VotePage:
        page = request.page_request
        votes, total = await self.vote_service.list_votes_by_target(
            request.votable_type, UUID(request.votable_id), page
        )
        return VotePage(
            votes=[VoteView.from_vote(v) for v in votes],
            pagination=Pagination.of(page, total),
        )


class ListUserVotesUseCase:
    """Use case for the votes a user has cast."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: ListUserVotesRequest) -> VotePage:
        page = request.page_request
        votes, total = await self.vote_service.list_votes_by_user(
            UserId(UUID(request.user_id)), page
        )
        return VotePage(
            votes=[VoteView.from_vote(v) for v in votes],
            pagination=Pagination.of(page, total),
        )
