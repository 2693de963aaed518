"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteUseCase, VoteDirection
from .get_votes import (
    GetUserVoteRequest,
    GetUserVoteResponse,
    GetUserVoteUseCase,
    ListTargetVotesRequest,
    ListTargetVotesUseCase,
    ListUserVotesRequest,
    ListUserVotesUseCase,
)

__all__ = [
    "CastVoteRequest",
    "CastVoteUseCase",
    "VoteDirection",
    "GetUserVoteRequest",
    "GetUserVoteResponse",
    "GetUserVoteUseCase",
    "ListTargetVotesRequest",
    "ListTargetVotesUseCase",
    "ListUserVotesRequest",
    "ListUserVotesUseCase",
]
