"""Domain value objects for Quill."""

from quill.domain.value.identifiers import CommentId, LikeId, PostId, UserId
from quill.domain.value.types import Actor, Category, LikeTargetType, Role, Slug

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "LikeId",
    # Types
    "Actor",
    "Category",
    "LikeTargetType",
    "Role",
    "Slug",
]
