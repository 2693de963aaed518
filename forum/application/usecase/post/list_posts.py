"""List and search posts use cases."""

from uuid import UUID

import logfire
from pydantic import Field, field_validator

from forum.application.usecase.common import PagedRequest, PostPage, PostView
from forum.domain.service import PostService
from forum.domain.value import (
    Pagination,
    PostSortField,
    SearchSort,
    SortOrder,
    UserId,
)


class ListPostsRequest(PagedRequest):
    """List posts request."""

    sort_by: PostSortField = PostSortField.CREATED_AT
    order: SortOrder = SortOrder.DESC


class ListUserPostsRequest(PagedRequest):
    """List a user's posts request."""

    user_id: str


class SearchPostsRequest(PagedRequest):
    """Search posts request."""

    query: str = Field(min_length=2)
    sort: SearchSort = SearchSort.RELEVANCE

    @field_validator("query", mode="before")
    @classmethod
    def strip_query(cls, query: str) -> str:
        """Trim the query so the length check sees what will be searched."""
        return query.strip() if isinstance(query, str) else query


class ListPostsUseCase:
    """Use case for the post feed."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: ListPostsRequest) -> PostPage:
        """Execute list posts flow.

        Args:
            request: List posts request with ordering and pagination

        Returns:
            One page of posts with pagination metadata
        """
        with logfire.span(
            "list_posts.execute",
            sort_by=request.sort_by.value,
            order=request.order.value,
            page=request.page,
            limit=request.limit,
        ):
            page = request.page_request
            posts, total = await self.post_service.list_posts(
                page, sort_by=request.sort_by, order=request.order
            )
            return PostPage(
                posts=[PostView.from_post(post) for post in posts],
                pagination=Pagination.of(page, total),
            )


class ListUserPostsUseCase:
    """Use case for listing the posts written by one user."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: ListUserPostsRequest) -> PostPage:
        """Execute list user posts flow.

        Raises:
            NotFoundError: If user not found
        """
        page = request.page_request
        posts, total = await self.post_service.list_posts_by_user(
            UserId(UUID(request.user_id)), page
        )
        return PostPage(
            posts=[PostView.from_post(post) for post in posts],
            pagination=Pagination.of(page, total),
        )


class SearchPostsUseCase:
    """Use case for full-text post search."""

    def __init__(self, post_service: PostService) -> None:
        self.post_service = post_service

    async def execute(self, request: SearchPostsRequest) -> PostPage:
        page = request.page_request
        posts, total = await self.post_service.search_posts(
            request.query, page, sort=request.sort
        )
        return PostPage(
            posts=[PostView.from_post(post) for post in posts],
            pagination=Pagination.of(page, total),
        )
