"""Update post use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.common import PostView
from forum.domain.error import NotAuthorizedError
from forum.domain.service import PostService
from forum.domain.value import PostId


class UpdatePostRequest(BaseModel):
    """Update post request.

    Only the title and content of a post can be edited.
    """

    post_id: str
    user_id: str  # User ID from authenticated user
    title: str | None = Field(default=None, min_length=5, max_length=200)
    content: str | None = Field(default=None, min_length=10)


class UpdatePostUseCase:
    """Use case for editing a post."""

    def __init__(self, post_service: PostService) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
        """
        self.post_service = post_service

    async def execute(self, request: UpdatePostRequest) -> PostView:
        """Execute update post flow.

        Raises:
            NotFoundError: If post not found
            NotAuthorizedError: If the requester is not the author
            ValidationError: If neither title nor content is given
        """
        with logfire.span(
            "update_post.execute", post_id=request.post_id, user_id=request.user_id
        ):
            post_id = PostId(UUID(request.post_id))
            post = await self.post_service.get_by_id(post_id)

            if str(post.author_id) != request.user_id:
                logfire.warn(
                    "Unauthorized post edit attempt",
                    post_id=request.post_id,
                    user_id=request.user_id,
                )
                raise NotAuthorizedError("post", request.post_id, request.user_id)

            updated = await self.post_service.update_post(
                post_id, title=request.title, content=request.content
            )
            return PostView.from_post(updated)
