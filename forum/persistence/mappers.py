"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Iterable, Optional
from uuid import UUID

from forum.domain.model import Comment, Feedback, Post, User, Vote
from forum.domain.value import (
    CommentId,
    FeedbackId,
    PostId,
    UserId,
    UserRole,
    VotableType,
    VoteId,
    VoteValue,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value else None


def _uuid_list(values: Optional[Iterable[Any]]) -> list[UUID]:
    return [_uuid(value) for value in values or []]


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        name=row["name"],
        email=row["email"],
        role=UserRole(row["role"]),
        avatar_url=row.get("avatar_url"),
        post_ids=[PostId(i) for i in _uuid_list(row.get("post_ids"))],
        comment_ids=[CommentId(i) for i in _uuid_list(row.get("comment_ids"))],
        joined_at=row["joined_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        content=row["content"],
        tags=list(row.get("tags") or []),
        media=list(row.get("media") or []),
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        comment_ids=[CommentId(i) for i in _uuid_list(row.get("comment_ids"))],
        view_count=row["view_count"],
        is_pinned=row["is_pinned"],
        is_locked=row["is_locked"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return post.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=CommentId(parent_id) if parent_id else None,
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        is_edited=row["is_edited"],
        is_deleted=row["is_deleted"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(row["id"]),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        value=VoteValue(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Enums are stored by value: the type as its label, the vote as a small int.
    """
    data = vote.model_dump()
    data["votable_type"] = vote.votable_type.value
    data["value"] = int(vote.value)
    return data


def row_to_feedback(row: Dict[str, Any]) -> Feedback:
    """Convert database row to Feedback domain model."""
    return Feedback(
        id=FeedbackId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        content=row["content"],
        created_at=row["created_at"],
    )


def feedback_to_dict(feedback: Feedback) -> Dict[str, Any]:
    """Convert Feedback domain model to database dict."""
    return feedback.model_dump()
