"""Response models and guards shared by the use cases."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from forum.domain.error import AdminRequiredError
from forum.domain.model import Comment, Feedback, Post, User, Vote
from forum.domain.service import UserService, VoteOutcome
from forum.domain.value import PageRequest, Pagination, UserId, UserRole, VotableType


class PagedRequest(BaseModel):
    """Request for one page of a listing."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)

    @property
    def page_request(self) -> PageRequest:
        return PageRequest(page=self.page, limit=self.limit)


class PostView(BaseModel):
    """A post as returned to clients."""

    post_id: str
    author_id: str
    title: str
    content: str
    tags: list[str]
    media: list[str]
    upvotes: int
    downvotes: int
    comment_count: int
    view_count: int
    is_pinned: bool
    is_locked: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostView":
        return cls(
            post_id=str(post.id),
            author_id=str(post.author_id),
            title=post.title,
            content=post.content,
            tags=post.tags,
            media=post.media,
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            comment_count=len(post.comment_ids),
            view_count=post.view_count,
            is_pinned=post.is_pinned,
            is_locked=post.is_locked,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class CommentView(BaseModel):
    """A comment as returned to clients."""

    comment_id: str
    post_id: str
    author_id: str
    parent_id: str | None
    content: str
    upvotes: int
    downvotes: int
    is_edited: bool
    is_deleted: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentView":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            content=comment.content,
            upvotes=comment.upvotes,
            downvotes=comment.downvotes,
            is_edited=comment.is_edited,
            is_deleted=comment.is_deleted,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class UserView(BaseModel):
    """Public profile of a user."""

    user_id: str
    name: str
    avatar_url: str | None
    role: UserRole
    post_count: int
    comment_count: int
    joined_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(
            user_id=str(user.id),
            name=user.name,
            avatar_url=user.avatar_url,
            role=user.role,
            post_count=len(user.post_ids),
            comment_count=len(user.comment_ids),
            joined_at=user.joined_at,
        )


class VoteView(BaseModel):
    """A single vote."""

    vote_id: str
    user_id: str
    votable_type: VotableType
    votable_id: str
    value: int
    updated_at: datetime

    @classmethod
    def from_vote(cls, vote: Vote) -> "VoteView":
        return cls(
            vote_id=vote.id,
            user_id=str(vote.user_id),
            votable_type=vote.votable_type,
            votable_id=str(vote.votable_id),
            value=int(vote.value),
            updated_at=vote.updated_at,
        )


class FeedbackView(BaseModel):
    feedback_id: str
    user_id: str
    content: str
    created_at: datetime

    @classmethod
    def from_feedback(cls, feedback: Feedback) -> "FeedbackView":
        return cls(
            feedback_id=str(feedback.id),
            user_id=str(feedback.user_id),
            content=feedback.content,
            created_at=feedback.created_at,
        )


class PostPage(BaseModel):
    posts: list[PostView]
    pagination: Pagination


class CommentPage(BaseModel):
    comments: list[CommentView]
    pagination: Pagination


class VotePage(BaseModel):
    votes: list[VoteView]
    pagination: Pagination


class FeedbackPage(BaseModel):
    feedback: list[FeedbackView]
    pagination: Pagination


class VoteResponse(BaseModel):
    """Result of casting or withdrawing a vote."""

    success: bool
    action: str
    previous_vote: int
    new_vote: int
    upvotes: int
    downvotes: int

    @classmethod
    def from_outcome(cls, outcome: VoteOutcome) -> "VoteResponse":
        return cls(
            success=outcome.success,
            action=outcome.action.value,
            previous_vote=outcome.previous_vote,
            new_vote=outcome.new_vote,
            upvotes=outcome.upvotes,
            downvotes=outcome.downvotes,
        )


def parse_user_id(value: Optional[str]) -> Optional[UserId]:
    """Parse an optional user ID string from an authenticated request."""
    return UserId(UUID(value)) if value else None


async def require_admin(user_service: UserService, user_id: str) -> User:
    """Load the requesting user and check they hold the admin role.

    Raises:
        NotFoundError: If the user doesn't exist
        AdminRequiredError: If the user is not an admin
    """
    user = await user_service.get_by_id(UserId(UUID(user_id)))
    if not user.is_admin:
        raise AdminRequiredError(str(user.id))
    return user
