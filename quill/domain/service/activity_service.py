"""Activity feed and dashboard statistics."""

import heapq
from collections.abc import Iterable, Iterator
from datetime import datetime, timedelta
from itertools import islice

import logfire

from quill.domain.model.activity import (
    ActivityEvent,
    CommentCreatedEvent,
    PostCreatedEvent,
    UserRegisteredEvent,
)
from quill.domain.model.comment import Comment
from quill.domain.model.post import Post
from quill.domain.model.user import User
from quill.domain.repository import CommentRepository, PostRepository, UserRepository
from quill.domain.value import PostId, UserId
from quill.domain.value.common import ValueObject

from .base import Service

UNKNOWN_NAME = "Unknown"
UNKNOWN_TITLE = "Unknown post"


class EntityStats(ValueObject):
    """Total rows and rows created inside the stats window."""

    total: int
    recent: int


class ContentStats(ValueObject):
    """Dashboard counters for posts, comments and users."""

    posts: EntityStats
    comments: EntityStats
    users: EntityStats
    since: datetime


class ActivityService(Service):
    """Builds the merged activity feed for dashboards."""

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        user_repository: UserRepository,
    ) -> None:
        """Initialize activity service.

        Args:
            post_repository: Post repository
            comment_repository: Comment repository
            user_repository: User repository (names for messages)
        """
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.user_repository = user_repository

    async def recent_activity(
        self, per_source: int, max_events: int
    ) -> list[ActivityEvent]:
        """Most recent posts, comments and registrations, newest first.

        Each source contributes its ``per_source`` newest rows; the three
        sorted streams are merged and cut at ``max_events``.

        Args:
            per_source: Rows read from each source
            max_events: Maximum number of events returned

        Returns:
            Events ordered by timestamp, newest first
        """
        with logfire.span(
            "activity_service.recent_activity",
            per_source=per_source,
            max_events=max_events,
        ):
            posts = await self.post_repository.find_recent(per_source)
            comments = await self.comment_repository.find_recent(per_source)
            users = await self.user_repository.find_recent(per_source)

            # Batch lookups for the names and titles used in messages
            names = await self._user_names(
                [p.author_id for p in posts] + [c.author_id for c in comments]
            )
            titles = await self._post_titles([c.post_id for c in comments])

            streams = (
                (self._post_event(p, names) for p in posts),
                (self._comment_event(c, names, titles) for c in comments),
                (self._user_event(u) for u in users),
            )
            events = list(islice(_merge_newest_first(*streams), max_events))

            logfire.info(
                "Activity feed built",
                posts=len(posts),
                comments=len(comments),
                users=len(users),
                events=len(events),
            )
            return events

    async def stats(self, since: datetime) -> ContentStats:
        """Totals and counts of rows created at or after ``since``."""
        with logfire.span("activity_service.stats", since=since.isoformat()):
            return ContentStats(
                posts=EntityStats(
                    total=await self.post_repository.count(),
                    recent=await self.post_repository.count(since=since),
                ),
                comments=EntityStats(
                    total=await self.comment_repository.count(),
                    recent=await self.comment_repository.count(since=since),
                ),
                users=EntityStats(
                    total=await self.user_repository.count(),
                    recent=await self.user_repository.count(since=since),
                ),
                since=since,
            )

    @staticmethod
    def window_start(days: int, now: datetime | None = None) -> datetime:
        """Start of a stats window ending at ``now``."""
        return (now or datetime.now()) - timedelta(days=days)

    async def _user_names(self, user_ids: list[UserId]) -> dict[UserId, str]:
        users = await self.user_repository.find_by_ids(list(dict.fromkeys(user_ids)))
        return {user.id: user.name for user in users}

    async def _post_titles(self, post_ids: list[PostId]) -> dict[PostId, str]:
        posts = await self.post_repository.find_by_ids(list(dict.fromkeys(post_ids)))
        return {post.id: post.title for post in posts}

    @staticmethod
    def _post_event(post: Post, names: dict) -> PostCreatedEvent:
        author = names.get(post.author_id, UNKNOWN_NAME)
        return PostCreatedEvent(
            entity_id=post.id,
            message=f'New post "{post.title}" by {author}',
            timestamp=post.created_at,
        )

    @staticmethod
    def _comment_event(
        comment: Comment, names: dict, titles: dict
    ) -> CommentCreatedEvent:
        title = titles.get(comment.post_id, UNKNOWN_TITLE)
        author = names.get(comment.author_id, UNKNOWN_NAME)
        return CommentCreatedEvent(
            entity_id=comment.id,
            message=f'New comment on "{title}" by {author}',
            timestamp=comment.created_at,
        )

    @staticmethod
    def _user_event(user: User) -> UserRegisteredEvent:
        return UserRegisteredEvent(
            entity_id=user.id,
            message=f"New user {user.name} registered",
            timestamp=user.created_at,
        )


def _merge_newest_first(
    *streams: Iterable[ActivityEvent],
) -> Iterator[ActivityEvent]:
    """Lazily merge streams that are each sorted newest first."""
    return heapq.merge(*streams, key=lambda event: event.timestamp, reverse=True)
