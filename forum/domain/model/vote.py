"""Vote entity.

A vote is a signed opinion (+1 or -1) of one user on one post or comment.
Each user holds at most one vote per item, which the composite id
``"{votable_id}_{user_id}"`` enforces.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, VotableType, VoteId, VoteValue


class Vote(DomainModel):
    """Vote entity."""

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # PostId or CommentId (both are UUIDs)
    value: VoteValue
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
