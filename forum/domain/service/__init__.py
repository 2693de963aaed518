"""Domain services."""

from .base import Service
from .comment_service import CommentDeletion, CommentService
from .feedback_service import FeedbackService
from .jwt_service import JWTService
from .post_service import PostService
from .search_service import (
    AutocompleteOutcome,
    AutocompleteResults,
    PrefixSearchService,
    RebuildResult,
    TagSuggestion,
)
from .user_service import UserService, UserStats
from .vote_service import VoteOutcome, VoteService

__all__ = [
    "AutocompleteOutcome",
    "AutocompleteResults",
    "CommentDeletion",
    "CommentService",
    "FeedbackService",
    "JWTService",
    "PostService",
    "PrefixSearchService",
    "RebuildResult",
    "Service",
    "TagSuggestion",
    "UserService",
    "UserStats",
    "VoteOutcome",
    "VoteService",
]
