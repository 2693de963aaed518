"""Delete post use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.domain.error import NotAuthorizedError
from forum.domain.model import Post
from forum.domain.service import CommentService, PostService, UserService, VoteService
from forum.domain.value import PostId, UserId, VotableType


class DeletePostRequest(BaseModel):
    """Delete post request."""

    post_id: str
    user_id: str  # User ID from authenticated user


class DeletePostResponse(BaseModel):
    success: bool
    post_id: str
    comments_deleted: int


async def delete_post_cascade(
    post: Post,
    post_service: PostService,
    comment_service: CommentService,
    vote_service: VoteService,
) -> int:
    """Delete a post with its comments and every vote on either.

    Returns:
        Number of comments deleted
    """
    with logfire.span("delete_post.cascade", post_id=str(post.id)):
        comment_ids = await comment_service.delete_comments_by_post(post.id)
        await vote_service.delete_votes_for(VotableType.COMMENT, comment_ids)
        await vote_service.delete_votes_for(VotableType.POST, [post.id])
        await post_service.delete_post(post)
        return len(comment_ids)


class DeletePostUseCase:
    """Use case for deleting a post; the author or an admin may do it."""

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

    async def execute(self, request: DeletePostRequest) -> DeletePostResponse:
        """Execute delete post flow.

        Raises:
            NotFoundError: If the post or the requester doesn't exist
            NotAuthorizedError: If the requester is neither author nor admin
        """
        post = await self.post_service.get_by_id(PostId(UUID(request.post_id)))

        if str(post.author_id) != request.user_id:
            requester = await self.user_service.get_by_id(
                UserId(UUID(request.user_id))
            )
            if not requester.is_admin:
                raise NotAuthorizedError("post", request.post_id, request.user_id)

        deleted = await delete_post_cascade(
            post, self.post_service, self.comment_service, self.vote_service
        )
        return DeletePostResponse(
            success=True, post_id=request.post_id, comments_deleted=deleted
        )
