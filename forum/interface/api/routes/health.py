"""Health check routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from forum.config import Settings
from forum.domain.cache import CacheStore
from forum.domain.search import SearchIndexState

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str
    cache: bool
    search_index_ready: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    store: FromDishka[CacheStore],
    index_state: FromDishka[SearchIndexState],
) -> HealthResponse:
    """Report liveness, cache reachability and index readiness.

    An unreachable cache degrades the service but does not fail the check.
    """
    cache_ok = await store.ping()
    return HealthResponse(
        status="healthy" if cache_ok else "degraded",
        timestamp=datetime.now(),
        version="0.1.0",
        git_sha=settings.git_sha,
        cache=cache_ok,
        search_index_ready=index_state.ready,
    )
