"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AuthSettings, CacheSettings, SearchSettings
from forum.domain.cache import (
    CacheStore,
    CommentCache,
    FeedCache,
    PostCache,
    UserCache,
    VoteCache,
)
from forum.domain.repository import (
    CommentRepository,
    FeedbackRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from forum.domain.search import SearchIndexState
from forum.domain.service import (
    CommentService,
    FeedbackService,
    JWTService,
    PostService,
    PrefixSearchService,
    UserService,
    VoteService,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Caches and services are REQUEST-scoped to align with the repository and
    session lifecycle. Index readiness is shared by the whole process.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_search_index_state(self) -> SearchIndexState:
        return SearchIndexState()

    # Caches

    @provide
    def get_user_cache(self, store: CacheStore, settings: CacheSettings) -> UserCache:
        return UserCache(store, settings.user_ttl)

    @provide
    def get_post_cache(self, store: CacheStore, settings: CacheSettings) -> PostCache:
        return PostCache(store, settings.post_ttl)

    @provide
    def get_comment_cache(
        self, store: CacheStore, settings: CacheSettings
    ) -> CommentCache:
        return CommentCache(store, settings.comment_ttl)

    @provide
    def get_vote_cache(self, store: CacheStore, settings: CacheSettings) -> VoteCache:
        return VoteCache(store, settings.vote_ttl)

    @provide
    def get_feed_cache(self, store: CacheStore, settings: CacheSettings) -> FeedCache:
        return FeedCache(store, settings.feed_ttl)

    # Services

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_search_service(
        self,
        store: CacheStore,
        state: SearchIndexState,
        post_repository: PostRepository,
        user_repository: UserRepository,
        settings: SearchSettings,
    ) -> PrefixSearchService:
        """Provide the autocomplete index service."""
        return PrefixSearchService(
            store=store,
            state=state,
            post_repository=post_repository,
            user_repository=user_repository,
            settings=settings,
        )

    @provide
    def get_user_service(
        self,
        user_repository: UserRepository,
        user_cache: UserCache,
        search_service: PrefixSearchService,
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository,
            user_cache=user_cache,
            search_service=search_service,
        )

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        post_cache: PostCache,
        feed_cache: FeedCache,
        user_service: UserService,
        search_service: PrefixSearchService,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            post_cache=post_cache,
            feed_cache=feed_cache,
            user_service=user_service,
            search_service=search_service,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        comment_cache: CommentCache,
        post_service: PostService,
        user_service: UserService,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            comment_cache=comment_cache,
            post_service=post_service,
            user_service=user_service,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        vote_cache: VoteCache,
        post_service: PostService,
        comment_service: CommentService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            vote_cache=vote_cache,
            post_service=post_service,
            comment_service=comment_service,
        )

    @provide
    def get_feedback_service(
        self, feedback_repository: FeedbackRepository, user_service: UserService
    ) -> FeedbackService:
        """Provide feedback domain service."""
        return FeedbackService(
            feedback_repository=feedback_repository, user_service=user_service
        )
