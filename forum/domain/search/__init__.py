"""Prefix-tree autocomplete index."""

from .prefix_tree import (
    MAX_PREFIX_LENGTH,
    STOPWORDS,
    Completion,
    PrefixTree,
    normalize_text,
    split_words,
    tokenize,
)
from .state import SearchIndexState

__all__ = [
    "MAX_PREFIX_LENGTH",
    "STOPWORDS",
    "Completion",
    "PrefixTree",
    "SearchIndexState",
    "normalize_text",
    "split_words",
    "tokenize",
]
