"""Post use cases."""

from .create_post import CreatePostRequest, CreatePostUseCase
from .delete_post import (
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    delete_post_cascade,
)
from .get_post import GetPostRequest, GetPostResponse, GetPostUseCase
from .list_posts import (
    ListPostsRequest,
    ListPostsUseCase,
    ListUserPostsRequest,
    ListUserPostsUseCase,
    SearchPostsRequest,
    SearchPostsUseCase,
)
from .update_post import UpdatePostRequest, UpdatePostUseCase

__all__ = [
    "CreatePostRequest",
    "CreatePostUseCase",
    "DeletePostRequest",
    "DeletePostResponse",
    "DeletePostUseCase",
    "delete_post_cascade",
    "GetPostRequest",
    "GetPostResponse",
    "GetPostUseCase",
    "ListPostsRequest",
    "ListPostsUseCase",
    "ListUserPostsRequest",
    "ListUserPostsUseCase",
    "SearchPostsRequest",
    "SearchPostsUseCase",
    "UpdatePostRequest",
    "UpdatePostUseCase",
]
