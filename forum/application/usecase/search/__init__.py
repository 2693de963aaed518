"""Search use cases."""

from .autocomplete import (
    AutocompleteRequest,
    AutocompleteUseCase,
    IndexStatusUseCase,
    TagSuggestionsRequest,
    TagSuggestionsResponse,
    TagSuggestionsUseCase,
)
from .maintain_index import (
    IncrementScoreRequest,
    IncrementScoreResponse,
    IncrementScoreUseCase,
    RebuildIndexRequest,
    RebuildIndexUseCase,
)

__all__ = [
    "AutocompleteRequest",
    "AutocompleteUseCase",
    "IndexStatusUseCase",
    "TagSuggestionsRequest",
    "TagSuggestionsResponse",
    "TagSuggestionsUseCase",
    "IncrementScoreRequest",
    "IncrementScoreResponse",
    "IncrementScoreUseCase",
    "RebuildIndexRequest",
    "RebuildIndexUseCase",
]
