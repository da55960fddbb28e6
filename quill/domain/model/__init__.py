"""Domain model entities for Quill."""

from quill.domain.model.activity import (
    ActivityEvent,
    CommentCreatedEvent,
    PostCreatedEvent,
    UserRegisteredEvent,
)
from quill.domain.model.comment import (
    Comment,
    CommentThread,
    build_threads,
    walk_threads,
)
from quill.domain.model.like import Like
from quill.domain.model.post import Post
from quill.domain.model.user import User

__all__ = [
    "ActivityEvent",
    "Comment",
    "CommentCreatedEvent",
    "CommentThread",
    "Like",
    "Post",
    "PostCreatedEvent",
    "User",
    "UserRegisteredEvent",
    "build_threads",
    "walk_threads",
]
