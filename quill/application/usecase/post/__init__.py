"""Post use cases."""

from .create_post import CreatePostRequest, CreatePostResponse, CreatePostUseCase
from .delete_post import DeletePostRequest, DeletePostResponse, DeletePostUseCase
from .featured_posts import (
    GetFeaturedPostsResponse,
    GetFeaturedPostsUseCase,
    GetRelatedPostsRequest,
    GetRelatedPostsResponse,
    GetRelatedPostsUseCase,
)
from .get_post import GetPostRequest, GetPostResponse, GetPostUseCase
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase
from .update_post import UpdatePostRequest, UpdatePostResponse, UpdatePostUseCase

__all__ = [
    "CreatePostRequest",
    "CreatePostResponse",
    "CreatePostUseCase",
    "DeletePostRequest",
    "DeletePostResponse",
    "DeletePostUseCase",
    "GetFeaturedPostsResponse",
    "GetFeaturedPostsUseCase",
    "GetPostRequest",
    "GetPostResponse",
    "GetPostUseCase",
    "GetRelatedPostsRequest",
    "GetRelatedPostsResponse",
    "GetRelatedPostsUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "UpdatePostRequest",
    "UpdatePostResponse",
    "UpdatePostUseCase",
]
