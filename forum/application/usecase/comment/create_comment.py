"""Create comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.common import CommentView
from forum.domain.service import CommentService, UserService
from forum.domain.value import CommentId, PostId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: str
    author_id: str  # User ID from authenticated user
    content: str = Field(min_length=1, max_length=1000)
    parent_id: str | None = None  # Parent comment for replies


class CreateCommentUseCase:
    """Use case for commenting on a post or replying to a comment."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CommentView:
        """Execute create comment flow.

        Raises:
            NotFoundError: If the author, post or parent doesn't exist
            UserBannedError: If the author is banned
            PostLockedError: If the post is locked
            ContentDeletedException: If the parent comment is deleted
            ValidationError: If the content is blank or the parent is on
                another post
        """
        with logfire.span(
            "create_comment.execute",
            post_id=request.post_id,
            parent_id=request.parent_id,
        ):
            author = await self.user_service.get_contributor(
                UserId(UUID(request.author_id))
            )
            comment = await self.comment_service.create_comment(
                PostId(UUID(request.post_id)),
                author,
                request.content,
                parent_id=CommentId(UUID(request.parent_id))
                if request.parent_id
                else None,
            )
            return CommentView.from_comment(comment)
