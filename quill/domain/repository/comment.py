"""Comment repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional

from quill.domain.model.comment import Comment
from quill.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, oldest first.

        Args:
            post_id: The post ID

        Returns:
            List of comments (top-level and replies)
        """
        pass

    @abstractmethod
    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies of a comment, oldest first."""
        pass

    @abstractmethod
    async def find_all(self, limit: int = 10, offset: int = 0) -> List[Comment]:
        """Find comments across all posts, newest first."""
        pass

    @abstractmethod
    async def find_recent(self, limit: int) -> List[Comment]:
        """Find the most recently created comments, newest first."""
        pass

    @abstractmethod
    async def count(self, since: Optional[datetime] = None) -> int:
        """Count comments, optionally only those created at or after ``since``."""
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments (including replies) on a post."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        pass

    @abstractmethod
    async def update(
        self, comment_id: CommentId, values: dict[str, Any]
    ) -> Optional[Comment]:
        """Overwrite the given content fields of a comment.

        Returns:
            Updated comment, or None if the comment doesn't exist
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment row (no cascade).

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def adjust_like_count(
        self, comment_id: CommentId, delta: int
    ) -> Optional[int]:
        """Atomically apply ``delta`` to the like counter.

        Returns:
            New counter value, or None if the comment doesn't exist or the
            counter would become negative
        """
        pass

    @abstractmethod
    async def set_like_count(
        self, comment_id: CommentId, like_count: int
    ) -> Optional[Comment]:
        """Overwrite the like counter (reconciliation only)."""
        pass
