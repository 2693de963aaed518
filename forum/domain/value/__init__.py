"""Domain value objects for the forum."""

from forum.domain.value.common import PageRequest, Pagination, ValueObject
from forum.domain.value.identifiers import (
    CommentId,
    FeedbackId,
    PostId,
    UserId,
    VoteId,
    make_vote_id,
)
from forum.domain.value.types import (
    AutocompleteType,
    PostSortField,
    SearchSort,
    SortOrder,
    UserRole,
    VotableType,
    VoteAction,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "VoteId",
    "FeedbackId",
    "make_vote_id",
    # Common
    "ValueObject",
    "PageRequest",
    "Pagination",
    # Types
    "VotableType",
    "VoteValue",
    "VoteAction",
    "UserRole",
    "PostSortField",
    "SortOrder",
    "SearchSort",
    "AutocompleteType",
]
