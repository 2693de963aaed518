"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .feedback import InMemoryFeedbackRepository
from .post import InMemoryPostRepository
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryFeedbackRepository",
    "InMemoryPostRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
