"""Post repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import Any, List, Optional

from quill.domain.model.post import Post
from quill.domain.query import PostQuery
from quill.domain.value import PostId, Slug


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, post_ids: Sequence[PostId]) -> List[Post]:
        """Find several posts at once (batch query, unknown IDs are skipped)."""
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        pass

    @abstractmethod
    async def slug_exists(self, slug: Slug) -> bool:
        """Check whether any post already uses ``slug``."""
        pass

    @abstractmethod
    async def find_by_query(self, query: PostQuery) -> List[Post]:
        """Find one page of posts matching a query.

        Args:
            query: Filters, sort order and page window

        Returns:
            Posts on the requested page, in query order
        """
        pass

    @abstractmethod
    async def count_by_query(self, query: PostQuery) -> int:
        """Count all posts matching the query's filters (ignores paging)."""
        pass

    @abstractmethod
    async def find_recent(self, limit: int) -> List[Post]:
        """Find the most recently created posts, newest first."""
        pass

    @abstractmethod
    async def count(self, since: Optional[datetime] = None) -> int:
        """Count posts, optionally only those created at or after ``since``."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Insert a new post.

        Raises:
            IntegrityError: If the slug is already taken
        """
        pass

    @abstractmethod
    async def update(self, post_id: PostId, values: dict[str, Any]) -> Optional[Post]:
        """Overwrite the given content fields of a post.

        Counters are never written here; they change through the
        ``adjust_*`` methods only.

        Returns:
            Updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post row (no cascade).

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def increment_views(self, post_id: PostId) -> None:
        """Add one view. Best effort, never decrements."""
        pass

    @abstractmethod
    async def adjust_like_count(self, post_id: PostId, delta: int) -> Optional[int]:
        """Atomically apply ``delta`` to the like counter.

        Returns:
            New counter value, or None if the post doesn't exist or the
            counter would become negative (nothing is written then)
        """
        pass

    @abstractmethod
    async def adjust_comment_count(self, post_id: PostId, delta: int) -> Optional[int]:
        """Atomically apply ``delta`` to the comment counter.

        Returns:
            New counter value, or None if the post doesn't exist or the
            counter would become negative (nothing is written then)
        """
        pass

    @abstractmethod
    async def set_counters(
        self, post_id: PostId, like_count: int, comment_count: int
    ) -> Optional[Post]:
        """Overwrite both counters (reconciliation only)."""
        pass
