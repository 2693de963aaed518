"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import CommentView
from forum.domain.service import CommentService
from forum.domain.value import CommentId, UserId


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str
    user_id: str  # User ID from authenticated user
    content: str


class UpdateCommentUseCase:
    """Use case for editing a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentView:
        """Execute update comment flow.

        Raises:
            NotFoundError: If comment not found
            NotAuthorizedError: If the requester is not the author
            ContentDeletedException: If the comment is deleted
            InvalidEditOperationError: If the new content is blank or too long
        """
        comment = await self.comment_service.update_comment(
            CommentId(UUID(request.comment_id)),
            UserId(UUID(request.user_id)),
            request.content,
        )
        return CommentView.from_comment(comment)
