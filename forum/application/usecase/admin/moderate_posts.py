"""Admin post moderation use cases."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.application.usecase.common import PostView, require_admin
from forum.application.usecase.post.delete_post import (
    DeletePostResponse,
    delete_post_cascade,
)
from forum.domain.service import CommentService, PostService, UserService, VoteService
from forum.domain.value import PostId


class ModeratePostRequest(BaseModel):
    post_id: str
    user_id: str  # User ID from authenticated admin


class TogglePinUseCase:
    """Use case for pinning or unpinning a post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: ModeratePostRequest) -> PostView:
        await require_admin(self.user_service, request.user_id)
        post = await self.post_service.toggle_pin(PostId(UUID(request.post_id)))
        return PostView.from_post(post)


class ToggleLockUseCase:
    """Use case for locking or unlocking a post against new comments."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: ModeratePostRequest) -> PostView:
        await require_admin(self.user_service, request.user_id)
        post = await self.post_service.toggle_lock(PostId(UUID(request.post_id)))
        return PostView.from_post(post)


class AdminDeletePostUseCase:
    """Use case for an admin removing any post along with its comments."""

    def __init__(
        self,
        post_service: PostService,
        comment_service: CommentService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> None:
        self.post_service = post_service
        self.comment_service = comment_service
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: ModeratePostRequest) -> DeletePostResponse:
        """Execute admin delete flow.

        Raises:
            AdminRequiredError: If the requester is not an admin
            NotFoundError: If the post doesn't exist
        """
        admin = await require_admin(self.user_service, request.user_id)
        post = await self.post_service.get_by_id(PostId(UUID(request.post_id)))
        deleted = await delete_post_cascade(
            post, self.post_service, self.comment_service, self.vote_service
        )
        logfire.info(
            "Post removed by admin",
            post_id=request.post_id,
            admin_id=str(admin.id),
            comments_deleted=deleted,
        )
        return DeletePostResponse(
            success=True, post_id=request.post_id, comments_deleted=deleted
        )
