"""Create feedback use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from forum.application.usecase.common import FeedbackView
from forum.domain.service import FeedbackService, UserService
from forum.domain.value import UserId


class CreateFeedbackRequest(BaseModel):
    user_id: str  # User ID from authenticated user
    content: str = Field(min_length=10, max_length=2000)


class CreateFeedbackUseCase:
    """Use case for sending feedback about the site."""

    def __init__(
        self, feedback_service: FeedbackService, user_service: UserService
    ) -> None:
        self.feedback_service = feedback_service
        self.user_service = user_service

    async def execute(self, request: CreateFeedbackRequest) -> FeedbackView:
        """Execute create feedback flow.

        Raises:
            NotFoundError: If the user doesn't exist
            UserBannedError: If the user is banned
        """
        author = await self.user_service.get_contributor(UserId(UUID(request.user_id)))
        feedback = await self.feedback_service.create_feedback(author, request.content)
        return FeedbackView.from_feedback(feedback)
