"""Get post use case."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import PostView, parse_user_id
from forum.domain.service import PostService, VoteService
from forum.domain.value import PostId, VotableType


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str
    user_id: str | None = None  # Current user ID (if authenticated)


class GetPostResponse(BaseModel):
    """A post with the viewer's own vote on it."""

    post: PostView
    user_vote: int = 0


class GetPostUseCase:
    """Use case for reading a post; every read counts as a view."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If post not found
        """
        post_id = PostId(UUID(request.post_id))
        post = await self.post_service.view_post(post_id)

        user_vote = 0
        viewer_id = parse_user_id(request.user_id)
        if viewer_id:
            user_vote = await self.vote_service.get_user_vote(
                VotableType.POST, post_id, viewer_id
            )

        return GetPostResponse(post=PostView.from_post(post), user_vote=user_vote)
