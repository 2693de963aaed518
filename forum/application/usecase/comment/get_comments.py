"""Comment read use cases."""

from uuid import UUID

from pydantic import BaseModel

from forum.application.usecase.common import CommentPage, CommentView, PagedRequest
from forum.domain.service import CommentService
from forum.domain.value import CommentId, Pagination, PostId, UserId


class GetCommentRequest(BaseModel):
    comment_id: str


class ListPostCommentsRequest(PagedRequest):
    post_id: str


class ListRepliesRequest(PagedRequest):
    comment_id: str


class ListUserCommentsRequest(PagedRequest):
    user_id: str


class CountResponse(BaseModel):
    count: int


class GetCommentUseCase:
    """Use case for reading a single comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentRequest) -> CommentView:
        """Raises NotFoundError if the comment doesn't exist."""
        comment = await self.comment_service.get_by_id(
            CommentId(UUID(request.comment_id))
        )
        return CommentView.from_comment(comment)


class ListPostCommentsUseCase:
    """Use case for the comments on a post, newest first."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ListPostCommentsRequest) -> CommentPage:
        page = request.page_request
        comments, total = await self.comment_service.list_comments_by_post(
            PostId(UUID(request.post_id)), page
        )
        return CommentPage(
            comments=[CommentView.from_comment(c) for c in comments],
            pagination=Pagination.of(page, total),
        )


class ListRepliesUseCase:
    """Use case for the replies to a comment, oldest first."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ListRepliesRequest) -> CommentPage:
        page = request.page_request
        replies, total = await self.comment_service.list_replies(
            CommentId(UUID(request.comment_id)), page
        )
        return CommentPage(
            comments=[CommentView.from_comment(c) for c in replies],
            pagination=Pagination.of(page, total),
        )


class ListUserCommentsUseCase:
    """Use case for the comments written by one user, newest first."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ListUserCommentsRequest) -> CommentPage:
        page = request.page_request
        comments, total = await self.comment_service.list_comments_by_user(
            UserId(UUID(request.user_id)), page
        )
        return CommentPage(
            comments=[CommentView.from_comment(c) for c in comments],
            pagination=Pagination.of(page, total),
        )


class CountCommentsUseCase:
    """Use case for counting the live comments on a post."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, post_id: str) -> CountResponse:
        count = await self.comment_service.count_comments(PostId(UUID(post_id)))
        return CountResponse(count=count)


class CountRepliesUseCase:
    """Use case for counting the live replies to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, comment_id: str) -> CountResponse:
        count = await self.comment_service.count_replies(
            CommentId(UUID(comment_id))
        )
        return CountResponse(count=count)
