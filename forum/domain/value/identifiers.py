"""Strongly typed identifiers for forum domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
FeedbackId = NewType("FeedbackId", UUID)

# Votes are keyed by "{votable_id}_{user_id}" so one user holds one vote per target
VoteId = NewType("VoteId", str)


def make_vote_id(votable_id: UUID, user_id: UUID) -> VoteId:
    """Build the composite vote key for a target and a voter."""
    return VoteId(f"{votable_id}_{user_id}")
