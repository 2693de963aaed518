"""Comment use cases."""

from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comments import (
    CountCommentsUseCase,
    CountRepliesUseCase,
    CountResponse,
    GetCommentRequest,
    GetCommentUseCase,
    ListPostCommentsRequest,
    ListPostCommentsUseCase,
    ListRepliesRequest,
    ListRepliesUseCase,
    ListUserCommentsRequest,
    ListUserCommentsUseCase,
)
from .update_comment import UpdateCommentRequest, UpdateCommentUseCase

__all__ = [
    "CountCommentsUseCase",
    "CountRepliesUseCase",
    "CountResponse",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentRequest",
    "GetCommentUseCase",
    "ListPostCommentsRequest",
    "ListPostCommentsUseCase",
    "ListRepliesRequest",
    "ListRepliesUseCase",
    "ListUserCommentsRequest",
    "ListUserCommentsUseCase",
    "UpdateCommentRequest",
    "UpdateCommentUseCase",
]
