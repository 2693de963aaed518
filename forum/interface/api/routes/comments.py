"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from forum.application.usecase.comment import (
    CountCommentsUseCase,
    CountRepliesUseCase,
    CountResponse,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentRequest,
    GetCommentUseCase,
    ListPostCommentsRequest,
    ListPostCommentsUseCase,
    ListRepliesRequest,
    ListRepliesUseCase,
    ListUserCommentsRequest,
    ListUserCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from forum.application.usecase.common import CommentPage, CommentView, VoteResponse
from forum.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    VoteDirection,
)
from forum.domain.service import JWTService
from forum.domain.value import VotableType
from forum.interface.api.auth import require_user_id
from forum.interface.api.errors import to_http_exception

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment or a reply."""

    post_id: UUID
    content: str = Field(min_length=1, max_length=1000)
    parent_id: UUID | None = None


class UpdateCommentAPIRequest(BaseModel):
    content: str


@router.get("/post/{post_id}", response_model=CommentPage)
async def list_post_comments(
    post_id: UUID,
    list_post_comments_use_case: FromDishka[ListPostCommentsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> CommentPage:
    """List the top-level comments on a post, newest first."""
    try:
        return await list_post_comments_use_case.execute(
            ListPostCommentsRequest(post_id=str(post_id), page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "list comments") from e


@router.get("/post/{post_id}/count", response_model=CountResponse)
async def count_post_comments(
    post_id: UUID, count_comments_use_case: FromDishka[CountCommentsUseCase]
) -> CountResponse:
    try:
        return await count_comments_use_case.execute(str(post_id))
    except Exception as e:
        raise to_http_exception(e, "count comments") from e


@router.get("/user/{user_id}", response_model=CommentPage)
async def list_user_comments(
    user_id: UUID,
    list_user_comments_use_case: FromDishka[ListUserCommentsUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> CommentPage:
    try:
        return await list_user_comments_use_case.execute(
            ListUserCommentsRequest(user_id=str(user_id), page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "list user comments") from e


@router.get("/{comment_id}", response_model=CommentView)
async def get_comment(
    comment_id: UUID, get_comment_use_case: FromDishka[GetCommentUseCase]
) -> CommentView:
    try:
        return await get_comment_use_case.execute(
            GetCommentRequest(comment_id=str(comment_id))
        )
    except Exception as e:
        raise to_http_exception(e, "fetch comment") from e


@router.get("/{comment_id}/replies", response_model=CommentPage)
async def list_replies(
    comment_id: UUID,
    list_replies_use_case: FromDishka[ListRepliesUseCase],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
) -> CommentPage:
    """List the replies to a comment, oldest first."""
    try:
        return await list_replies_use_case.execute(
            ListRepliesRequest(comment_id=str(comment_id), page=page, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "list replies") from e


@router.get("/{comment_id}/replycount", response_model=CountResponse)
async def count_replies(
    comment_id: UUID, count_replies_use_case: FromDishka[CountRepliesUseCase]
) -> CountResponse:
    try:
        return await count_replies_use_case.execute(str(comment_id))
    except Exception as e:
        raise to_http_exception(e, "count replies") from e


@router.post("", response_model=CommentView, status_code=status.HTTP_201_CREATED)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentView:
    """Comment on a post, or reply to a comment when ``parent_id`` is set.

    Locked posts and banned users get 403.
    """
    try:
        author_id = require_user_id(jwt_service, auth_token)
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=str(request.post_id),
                author_id=author_id,
                content=request.content,
                parent_id=str(request.parent_id) if request.parent_id else None,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "create comment") from e


@router.put("/{comment_id}", response_model=CommentView)
async def update_comment(
    comment_id: UUID,
    request: UpdateCommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentView:
    """Edit a comment. Only the author may edit, and not once deleted."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await update_comment_use_case.execute(
            UpdateCommentRequest(
                comment_id=str(comment_id), user_id=user_id, content=request.content
            )
        )
    except Exception as e:
        raise to_http_exception(e, "update comment") from e


@router.delete("/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment; one with replies is blanked out instead."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=str(comment_id), user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "delete comment") from e


async def _vote_on_comment(
    comment_id: UUID,
    direction: VoteDirection,
    cast_vote_use_case: CastVoteUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
) -> VoteResponse:
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await cast_vote_use_case.execute(
            CastVoteRequest(
                votable_type=VotableType.COMMENT,
                votable_id=str(comment_id),
                user_id=user_id,
                direction=direction,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "vote on comment") from e


@router.post("/{comment_id}/upvote", response_model=VoteResponse)
async def upvote_comment(
    comment_id: UUID,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    return await _vote_on_comment(
        comment_id, VoteDirection.UP, cast_vote_use_case, jwt_service, auth_token
    )


@router.post("/{comment_id}/downvote", response_model=VoteResponse)
async def downvote_comment(
    comment_id: UUID,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    return await _vote_on_comment(
        comment_id, VoteDirection.DOWN, cast_vote_use_case, jwt_service, auth_token
    )


@router.delete("/{comment_id}/vote", response_model=VoteResponse)
async def remove_comment_vote(
    comment_id: UUID,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    return await _vote_on_comment(
        comment_id, VoteDirection.REMOVE, cast_vote_use_case, jwt_service, auth_token
    )
