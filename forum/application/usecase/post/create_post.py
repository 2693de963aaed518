"""Create post use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.common import PostView
from forum.domain.service import PostService, UserService
from forum.domain.value import UserId


class CreatePostRequest(BaseModel):
    """Create post request."""

    author_id: str  # User ID from authenticated user
    title: str = Field(min_length=5, max_length=200)
    content: str = Field(min_length=10)
    tags: list[str] = Field(default_factory=list)
    media: list[str] = Field(default_factory=list)


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            user_service: User domain service
        """
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: CreatePostRequest) -> PostView:
        """Execute create post flow.

        Steps:
        1. Load the author and check they are allowed to contribute
        2. Create the post (cached, indexed, added to the author's list)

        Raises:
            NotFoundError: If the author doesn't exist
            UserBannedError: If the author is banned
        """
        with logfire.span("create_post.execute", author_id=request.author_id):
            author = await self.user_service.get_contributor(
                UserId(UUID(request.author_id))
            )
            post = await self.post_service.create_post(
                author,
                title=request.title,
                content=request.content,
                tags=request.tags,
                media=request.media,
            )
            return PostView.from_post(post)
