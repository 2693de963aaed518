"""Autocomplete use cases."""

from typing import Any

from pydantic import BaseModel, Field

from forum.domain.service import (
    AutocompleteOutcome,
    PrefixSearchService,
    TagSuggestion,
)
from forum.domain.value import AutocompleteType


class AutocompleteRequest(BaseModel):
    query: str = Field(max_length=200)
    type: AutocompleteType = AutocompleteType.ALL
    limit: int = Field(default=10, ge=1, le=50)


class TagSuggestionsRequest(BaseModel):
    query: str = Field(max_length=100)
    limit: int = Field(default=10, ge=1, le=50)


class TagSuggestionsResponse(BaseModel):
    query: str
    tags: list[TagSuggestion]


class AutocompleteUseCase:
    """Use case for type-ahead suggestions across posts, users and tags."""

    def __init__(self, search_service: PrefixSearchService) -> None:
        self.search_service = search_service

    async def execute(self, request: AutocompleteRequest) -> AutocompleteOutcome:
        return await self.search_service.autocomplete(
            request.query, type=request.type, limit=request.limit
        )


class TagSuggestionsUseCase:
    """Use case for suggesting tags while a post is being written."""

    def __init__(self, search_service: PrefixSearchService) -> None:
        self.search_service = search_service

    async def execute(self, request: TagSuggestionsRequest) -> TagSuggestionsResponse:
        tags = await self.search_service.get_tag_suggestions(
            request.query, limit=request.limit
        )
        return TagSuggestionsResponse(query=request.query, tags=tags)


class IndexStatusUseCase:
    """Use case for reporting the health of the autocomplete index."""

    def __init__(self, search_service: PrefixSearchService) -> None:
        self.search_service = search_service

    async def execute(self) -> dict[str, Any]:
        return await self.search_service.get_index_stats()
