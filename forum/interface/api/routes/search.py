"""Search and autocomplete routes."""

from typing import Any, Literal

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query
from pydantic import BaseModel, Field

from forum.application.usecase.search import (
    AutocompleteRequest,
    AutocompleteUseCase,
    IncrementScoreRequest,
    IncrementScoreResponse,
    IncrementScoreUseCase,
    IndexStatusUseCase,
    RebuildIndexRequest,
    RebuildIndexUseCase,
    TagSuggestionsRequest,
    TagSuggestionsResponse,
    TagSuggestionsUseCase,
)
from forum.domain.service import AutocompleteOutcome, JWTService, RebuildResult
from forum.domain.value import AutocompleteType
from forum.interface.api.auth import require_user_id
from forum.interface.api.errors import to_http_exception

router = APIRouter(prefix="/search", tags=["search"], route_class=DishkaRoute)


class IncrementScoreAPIRequest(BaseModel):
    type: Literal["post", "tag"]
    text: str = Field(min_length=1, max_length=200)


@router.get("/autocomplete", response_model=AutocompleteOutcome)
async def autocomplete(
    autocomplete_use_case: FromDishka[AutocompleteUseCase],
    q: str = Query(max_length=200),
    type: AutocompleteType = AutocompleteType.ALL,
    limit: int = Query(default=10, ge=1, le=50),
) -> AutocompleteOutcome:
    """Suggest posts, users and tags for a partially typed query.

    While the index is building the answer says so instead of failing, so
    clients can fall back to ``/posts/search``.
    """
    try:
        return await autocomplete_use_case.execute(
            AutocompleteRequest(query=q, type=type, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "autocomplete") from e


@router.get("/tags", response_model=TagSuggestionsResponse)
async def tag_suggestions(
    tag_suggestions_use_case: FromDishka[TagSuggestionsUseCase],
    q: str = Query(max_length=100),
    limit: int = Query(default=10, ge=1, le=50),
) -> TagSuggestionsResponse:
    try:
        return await tag_suggestions_use_case.execute(
            TagSuggestionsRequest(query=q, limit=limit)
        )
    except Exception as e:
        raise to_http_exception(e, "suggest tags") from e


@router.get("/status")
async def index_status(
    index_status_use_case: FromDishka[IndexStatusUseCase],
) -> dict[str, Any]:
    """Report index readiness and per-tree statistics."""
    try:
        return await index_status_use_case.execute()
    except Exception as e:
        raise to_http_exception(e, "fetch search index status") from e


@router.post("/rebuild", response_model=RebuildResult)
async def rebuild_index(
    rebuild_index_use_case: FromDishka[RebuildIndexUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RebuildResult:
    """Rebuild the autocomplete index from the database. Admin only."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await rebuild_index_use_case.execute(
            RebuildIndexRequest(user_id=user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "rebuild search index") from e


@router.post("/increment", response_model=IncrementScoreResponse)
async def increment_score(
    request: IncrementScoreAPIRequest,
    increment_score_use_case: FromDishka[IncrementScoreUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> IncrementScoreResponse:
    """Boost a post title or tag in autocomplete rankings. Admin only."""
    try:
        user_id = require_user_id(jwt_service, auth_token)
        return await increment_score_use_case.execute(
            IncrementScoreRequest(user_id=user_id, type=request.type, text=request.text)
        )
    except Exception as e:
        raise to_http_exception(e, "increment score") from e
