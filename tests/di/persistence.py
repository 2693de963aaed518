"""Mock persistence providers for testing."""

from dishka import Scope, provide

from forum.domain.repository import (
    CommentRepository,
    FeedbackRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from forum.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryFeedbackRepository,
    InMemoryPostRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from forum.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so every request against one container sees
    the same data. Each test builds its own container, which keeps tests
    isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_post_repository(self) -> PostRepository:
        return InMemoryPostRepository()

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_vote_repository(self) -> VoteRepository:
        return InMemoryVoteRepository()

    @provide(scope=Scope.APP)
    def get_feedback_repository(self) -> FeedbackRepository:
        return InMemoryFeedbackRepository()
