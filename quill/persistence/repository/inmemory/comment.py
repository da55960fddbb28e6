"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Any, List, Optional

from quill.domain.model.comment import Comment
from quill.domain.repository.comment import CommentRepository
from quill.domain.value import CommentId, PostId

from .store import InMemoryStore


def _oldest_first(comments: list[Comment]) -> list[Comment]:
    return sorted(comments, key=lambda c: (c.created_at, str(c.id)))


def _newest_first(comments: list[Comment]) -> list[Comment]:
    ordered = sorted(comments, key=lambda c: str(c.id))
    ordered.sort(key=lambda c: c.created_at, reverse=True)
    return ordered


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self.store.get("comments", comment_id)

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, oldest first."""
        return _oldest_first(
            [c for c in self.store.rows("comments") if c.post_id == post_id]
        )

    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies of a comment."""
        return _oldest_first(
            [c for c in self.store.rows("comments") if c.parent_id == parent_id]
        )

    async def find_all(self, limit: int = 10, offset: int = 0) -> List[Comment]:
        """Find comments across all posts, newest first."""
        return _newest_first(self.store.rows("comments"))[offset : offset + limit]

    async def find_recent(self, limit: int) -> List[Comment]:
        """Find the newest comments."""
        return await self.find_all(limit=limit)

    async def count(self, since: Optional[datetime] = None) -> int:
        """Count comments, optionally since a point in time."""
        comments = self.store.rows("comments")
        if since is None:
            return len(comments)
        return sum(1 for c in comments if c.created_at >= since)

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments on a post."""
        return sum(1 for c in self.store.rows("comments") if c.post_id == post_id)

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        self.store.insert("comments", comment.id, comment)
        return comment

    async def update(
        self, comment_id: CommentId, values: dict[str, Any]
    ) -> Optional[Comment]:
        """Overwrite content fields of a comment."""
        return self.store.update("comments", comment_id, values)

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment row."""
        return self.store.delete("comments", comment_id) is not None

    async def adjust_like_count(
        self, comment_id: CommentId, delta: int
    ) -> Optional[int]:
        """Apply a delta to the like counter."""
        return self.store.add("comments", comment_id, "like_count", delta)

    async def set_like_count(
        self, comment_id: CommentId, like_count: int
    ) -> Optional[Comment]:
        """Overwrite the like counter."""
        return self.store.update("comments", comment_id, {"like_count": like_count})
