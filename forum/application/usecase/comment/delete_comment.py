"""Delete comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.domain.service import CommentService, VoteService
from forum.domain.value import CommentId, UserId, VotableType


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    user_id: str  # User ID from authenticated user


class DeleteCommentResponse(BaseModel):
    """Delete comment response.

    ``hard_deleted`` is False when the comment had replies and was only
    blanked out.
    """

    success: bool
    comment_id: str
    hard_deleted: bool


class DeleteCommentUseCase:
    """Use case for deleting a comment."""

    def __init__(
        self, comment_service: CommentService, vote_service: VoteService
    ) -> None:
        self.comment_service = comment_service
        self.vote_service = vote_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Votes on a removed comment are deleted with it; a soft-deleted
        comment keeps them.

        Raises:
            NotFoundError: If comment not found
            NotAuthorizedError: If the requester is not the author
        """
        with logfire.span("delete_comment.execute", comment_id=request.comment_id):
            comment_id = CommentId(UUID(request.comment_id))
            deletion = await self.comment_service.delete_comment(
                comment_id, UserId(UUID(request.user_id))
            )
            if deletion.hard_deleted:
                await self.vote_service.delete_votes_for(
                    VotableType.COMMENT, [comment_id]
                )
            return DeleteCommentResponse(
                success=True,
                comment_id=request.comment_id,
                hard_deleted=deletion.hard_deleted,
            )
