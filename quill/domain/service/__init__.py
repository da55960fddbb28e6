"""Domain services."""

from .activity_service import ActivityService, ContentStats, EntityStats
from .base import Service
from .comment_service import CommentService
from .counter_service import CounterService
from .integrity_service import CascadeResult, IntegrityService
from .like_service import LikeService, LikeToggleResult
from .post_service import PostService

__all__ = [
    "ActivityService",
    "CascadeResult",
    "CommentService",
    "ContentStats",
    "CounterService",
    "EntityStats",
    "IntegrityService",
    "LikeService",
    "LikeToggleResult",
    "PostService",
    "Service",
]
