"""Delete feedback use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.domain.service import FeedbackService
from forum.domain.value import FeedbackId, UserId


class DeleteFeedbackRequest(BaseModel):
    feedback_id: str
    user_id: str  # User ID from authenticated user


class DeleteFeedbackResponse(BaseModel):
    success: bool
    feedback_id: str


class DeleteFeedbackUseCase:
    """Use case for an author withdrawing their feedback."""

    def __init__(self, feedback_service: FeedbackService) -> None:
        self.feedback_service = feedback_service

    async def execute(self, request: DeleteFeedbackRequest) -> DeleteFeedbackResponse:
        """Raises NotFoundError or NotAuthorizedError."""
        await self.feedback_service.delete_feedback(
            FeedbackId(UUID(request.feedback_id)), UserId(UUID(request.user_id))
        )
        return DeleteFeedbackResponse(success=True, feedback_id=request.feedback_id)
