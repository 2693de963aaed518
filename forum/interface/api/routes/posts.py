"""Post routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from forum.application.usecase.common import PostPage, PostView, VotePage, VoteResponse
from forum.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostResponse,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    ListUserPostsRequest,
    ListUserPostsUseCase,
    SearchPostsRequest,
    SearchPostsUseCase,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from forum.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    GetUserVoteRequest,
    GetUserVoteResponse,
    GetUserVoteUseCase,
    ListTargetVotesRequest,
    ListTargetVotesUseCase,
    VoteDirection,
)
from forum.domain.service import JWTService
from forum.domain.value import PostSortField, SearchSort, SortOrder, VotableType
from forum.interface.api.auth import optional_user_id, require_user_id
from forum.interface.api.errors import to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=5, max_length=200)
    content: str = Field(min_length=10)
    tags: list[str] = Field(default_factory=list, max_length=10)
    media: list[str] = Field(default_factory=list)


class UpdatePostAPIRequest(BaseModel):
    """API request for editing a post's title or content."""

    title: str | None = Field(default=None, min_length=5, max_length=200)
    content: str | None = Field(default=None, min_length=10)


@router.get("", response_model=PostPage)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    sort_by: PostSortField = PostSortField.CREATED_AT,
    order: SortOrder = SortOrder.DESC,
) -> PostPage:
    """List the post feed, served from the feed cache when warm."""
    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(page=page, limit=limit, sort_by=sort_by, order=order)
        )
    except Exception as e:
        raise to_http_exception(e, "list posts") from e


@router.get("/search", response_model=PostPage)
async def search_posts(
    search_posts_use_case: FromDishka[SearchPostsUseCase],
    q: str = Query(min_length=2, max_length=200),
    sort: SearchSort = SearchSort.RELEVANCE,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> PostPage:
    """Search posts by title, content and tags."""
    try:
        return await search_posts_use_case.execute(
            SearchPostsRequest(query=q, sort=sort, page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "search posts") from e


@router.get("/user/{user_id}", response_model=PostPage)
async def list_user_posts(
    user_id: UUID,
    list_user_posts_use_case: FromDishka[ListUserPostsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> PostPage:
    try:
        return await list_user_posts_use_case.execute(
            ListUserPostsRequest(user_id=str(user_id), page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "list user posts") from e


@router.get("/{post_id}", response_model=GetPostResponse)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetPostResponse:
    """Get a post by ID and count the view.

    Signed-in callers also get their own vote on the post.
    """
    try:
        return await get_post_use_case.execute(
            GetPostRequest(
                post_id=str(post_id),
                user_id=optional_user_id(jwt_service, auth_token),
            )
        )
    except Exception as e:
        raise to_http_exception(e, "fetch post") from e


@router.post("", response_model=PostView, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostView:
    """Create a new post.

    Requires authentication; banned users get 403.
    """
    try:
        author_id = require_user_id(jwt_service, auth_token)
        return await create_post_use_case.execute(
            CreatePostRequest(
                author_id=author_id,
                title=request.title,
                content=request.content,
                tags=request.tags,
                media=request.media,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "create post") from e


@router.put("/{post_id}", response_model=PostView)
async def update_post(
    post_id: UUID,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostView:
    """Edit a post. Only the author may edit."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await update_post_use_case.execute(
            UpdatePostRequest(
                post_id=str(post_id),
                user_id=user_id,
                title=request.title,
                content=request.content,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "update post") from e


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: UUID,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeletePostResponse:
    """Delete a post with its comments and votes (author or admin)."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await delete_post_use_case.execute(
            DeletePostRequest(post_id=str(post_id), user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "delete post") from e


async def _vote_on_post(
    post_id: UUID,
    direction: VoteDirection,
    cast_vote_use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> VoteResponse:
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(post_id),
                user_id=user_id,
                direction=direction,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "vote on post") from e


@router.post("/{post_id}/upvote", response_model=VoteResponse)
async def upvote_post(
    post_id: UUID,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Upvote a post; upvoting again withdraws the vote."""
    return await _vote_on_post(
        post_id, VoteDirection.UP, cast_vote_use_case, jwt_service, auth_token
    )


@router.post("/{post_id}/downvote", response_model=VoteResponse)
async def downvote_post(
    post_id: UUID,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Downvote a post; downvoting again withdraws the vote."""
    return await _vote_on_post(
        post_id, VoteDirection.DOWN, cast_vote_use_case, jwt_service, auth_token
    )


@router.delete("/{post_id}/vote", response_model=VoteResponse)
async def remove_post_vote(
    post_id: UUID,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    return await _vote_on_post(
        post_id, VoteDirection.REMOVE, cast_vote_use_case, jwt_service, auth_token
    )


@router.get("/{post_id}/vote", response_model=GetUserVoteResponse)
async def get_my_post_vote(
    post_id: UUID,
    get_user_vote_use_case: FromDishka[GetUserVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetUserVoteResponse:
    """Return the caller's vote on a post (1, -1 or 0)."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await get_user_vote_use_case.execute(
            GetUserVoteRequest(
                votable_type=VotableType.POST,
                votable_id=str(post_id),
                user_id=user_id,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "fetch vote") from e


@router.get("/{post_id}/votes", response_model=VotePage)
async def list_post_votes(
    post_id: UUID,
    list_target_votes_use_case: FromDishka[ListTargetVotesUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> VotePage:
    try:
        return await list_target_votes_use_case.execute(
            ListTargetVotesRequest(
                votable_type=VotableType.POST,
                votable_id=str(post_id),
                page=page,
                limit=limit,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "list votes") from e
