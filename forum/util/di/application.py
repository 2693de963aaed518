"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.admin import (
    AdminDeletePostUseCase,
    DashboardStatsUseCase,
    ListUsersUseCase,
    ToggleBanUseCase,
    ToggleLockUseCase,
    TogglePinUseCase,
)
from forum.application.usecase.auth import (
    GetCurrentUserUseCase,
    LoginUseCase,
    UpdateProfileUseCase,
)
from forum.application.usecase.comment import (
    CountCommentsUseCase,
    CountRepliesUseCase,
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentUseCase,
    ListPostCommentsUseCase,
    ListRepliesUseCase,
    ListUserCommentsUseCase,
    UpdateCommentUseCase,
)
from forum.application.usecase.feedback import (
    CreateFeedbackUseCase,
    DeleteFeedbackUseCase,
    GetFeedbackUseCase,
    ListFeedbackUseCase,
    ListUserFeedbackUseCase,
)
from forum.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    ListUserPostsUseCase,
    SearchPostsUseCase,
    UpdatePostUseCase,
)
from forum.application.usecase.search import (
    AutocompleteUseCase,
    IncrementScoreUseCase,
    IndexStatusUseCase,
    RebuildIndexUseCase,
    TagSuggestionsUseCase,
)
from forum.application.usecase.user import GetUserProfileUseCase
from forum.application.usecase.vote import (
    CastVoteUseCase,
    GetUserVoteUseCase,
    ListTargetVotesUseCase,
    ListUserVotesUseCase,
)
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed.

    Use cases take their collaborators by constructor annotation, so each is
    registered by class and resolved per request.
    """

    scope = Scope.REQUEST

    # Auth use cases
    login = provide(LoginUseCase)
    get_current_user = provide(GetCurrentUserUseCase)
    update_profile = provide(UpdateProfileUseCase)

    # Post use cases
    create_post = provide(CreatePostUseCase)
    get_post = provide(GetPostUseCase)
    list_posts = provide(ListPostsUseCase)
    list_user_posts = provide(ListUserPostsUseCase)
    search_posts = provide(SearchPostsUseCase)
    update_post = provide(UpdatePostUseCase)
    delete_post = provide(DeletePostUseCase)

    # Comment use cases
    create_comment = provide(CreateCommentUseCase)
    get_comment = provide(GetCommentUseCase)
    list_post_comments = provide(ListPostCommentsUseCase)
    list_replies = provide(ListRepliesUseCase)
    list_user_comments = provide(ListUserCommentsUseCase)
    count_comments = provide(CountCommentsUseCase)
    count_replies = provide(CountRepliesUseCase)
    update_comment = provide(UpdateCommentUseCase)
    delete_comment = provide(DeleteCommentUseCase)

    # Vote use cases
    cast_vote = provide(CastVoteUseCase)
    get_user_vote = provide(GetUserVoteUseCase)
    list_target_votes = provide(ListTargetVotesUseCase)
    list_user_votes = provide(ListUserVotesUseCase)

    # User use cases
    get_user_profile = provide(GetUserProfileUseCase)

    # Feedback use cases
    create_feedback = provide(CreateFeedbackUseCase)
    get_feedback = provide(GetFeedbackUseCase)
    list_feedback = provide(ListFeedbackUseCase)
    list_user_feedback = provide(ListUserFeedbackUseCase)
    delete_feedback = provide(DeleteFeedbackUseCase)

    # Search use cases
    autocomplete = provide(AutocompleteUseCase)
    tag_suggestions = provide(TagSuggestionsUseCase)
    index_status = provide(IndexStatusUseCase)
    rebuild_index = provide(RebuildIndexUseCase)
    increment_score = provide(IncrementScoreUseCase)

    # Admin use cases
    toggle_pin = provide(TogglePinUseCase)
    toggle_lock = provide(ToggleLockUseCase)
    admin_delete_post = provide(AdminDeletePostUseCase)
    toggle_ban = provide(ToggleBanUseCase)
    list_users = provide(ListUsersUseCase)
    dashboard_stats = provide(DashboardStatsUseCase)
