"""Admin-only autocomplete index maintenance."""

from typing import Literal

import logfire
from pydantic import BaseModel, Field

from forum.application.usecase.common import require_admin
from forum.domain.service import PrefixSearchService, RebuildResult, UserService


class RebuildIndexRequest(BaseModel):
    user_id: str  # User ID from authenticated user


class IncrementScoreRequest(BaseModel):
    """Boost one completion so it ranks higher."""

    user_id: str  # User ID from authenticated user
    type: Literal["post", "tag"]
    text: str = Field(min_length=1, max_length=200)


class IncrementScoreResponse(BaseModel):
    success: bool
    type: str
    text: str
    updated: int  # number of prefix entries touched


class RebuildIndexUseCase:
    """Use case for rebuilding the autocomplete index from the database."""

    def __init__(
        self, search_service: PrefixSearchService, user_service: UserService
    ) -> None:
        self.search_service = search_service
        self.user_service = user_service

    async def execute(self, request: RebuildIndexRequest) -> RebuildResult:
        """Raises AdminRequiredError unless the requester is an admin."""
        admin = await require_admin(self.user_service, request.user_id)
        logfire.info("Search index rebuild requested", admin_id=str(admin.id))
        return await self.search_service.rebuild_index()


class IncrementScoreUseCase:
    def __init__(
        self, search_service: PrefixSearchService, user_service: UserService
    ) -> None:
        self.search_service = search_service
        self.user_service = user_service

    async def execute(self, request: IncrementScoreRequest) -> IncrementScoreResponse:
        """Raises AdminRequiredError unless the requester is an admin."""
        await require_admin(self.user_service, request.user_id)
        if request.type == "post":
            updated = await self.search_service.increment_post_score(request.text)
        else:
            updated = await self.search_service.increment_tag_score(request.text)
        return IncrementScoreResponse(
            success=True, type=request.type, text=request.text, updated=updated
        )
