"""In-memory post repository for testing."""

import operator
from collections.abc import Sequence
from datetime import datetime
from typing import Any, Callable, List, Optional

from sqlalchemy.exc import IntegrityError

from quill.domain.model.post import Post
from quill.domain.query import FieldFilter, FilterOperator, PostQuery
from quill.domain.repository.post import PostRepository
from quill.domain.value import PostId, Slug

from .store import InMemoryStore

_COMPARE: dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.EQ: operator.eq,
    FilterOperator.GT: operator.gt,
    FilterOperator.GTE: operator.ge,
    FilterOperator.LT: operator.lt,
    FilterOperator.LTE: operator.le,
}


def _value(post: Post, field: str) -> Any:
    value = getattr(post, field)
    return str(value) if isinstance(value, Slug) else value


def _matches(post: Post, field_filter: FieldFilter) -> bool:
    value = _value(post, field_filter.field)

    if field_filter.field == "tags":
        wanted = (
            set(field_filter.value)
            if field_filter.operator == FilterOperator.IN
            else {field_filter.value}
        )
        return bool(wanted & set(value))

    if field_filter.operator == FilterOperator.IN:
        return value in field_filter.value
    return _COMPARE[field_filter.operator](value, field_filter.value)


def _sorted(posts: list[Post], query: PostQuery) -> list[Post]:
    # Stable sorts applied from the last key to the first, id as final tie-break
    ordered = sorted(posts, key=lambda p: str(p.id))
    for key in reversed(query.sort):
        ordered.sort(
            key=lambda p, f=key.field: _value(p, f), reverse=key.descending
        )
    return ordered


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self.store.get("posts", post_id)

    async def find_by_ids(self, post_ids: Sequence[PostId]) -> List[Post]:
        """Find several posts at once."""
        found = (self.store.get("posts", post_id) for post_id in post_ids)
        return [post for post in found if post is not None]

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        for post in self.store.rows("posts"):
            if post.slug == slug:
                return post
        return None

    async def slug_exists(self, slug: Slug) -> bool:
        """Check whether a slug is taken."""
        return await self.find_by_slug(slug) is not None

    def _filtered(self, query: PostQuery) -> list[Post]:
        return [
            post
            for post in self.store.rows("posts")
            if all(_matches(post, f) for f in query.filters)
        ]

    async def find_by_query(self, query: PostQuery) -> List[Post]:
        """Find one page of posts matching a query."""
        ordered = _sorted(self._filtered(query), query)
        return ordered[query.offset : query.offset + query.limit]

    async def count_by_query(self, query: PostQuery) -> int:
        """Count posts matching the query's filters."""
        return len(self._filtered(query))

    async def find_recent(self, limit: int) -> List[Post]:
        """Find the newest posts."""
        return _sorted(self.store.rows("posts"), PostQuery())[:limit]

    async def count(self, since: Optional[datetime] = None) -> int:
        """Count posts, optionally since a point in time."""
        posts = self.store.rows("posts")
        if since is None:
            return len(posts)
        return sum(1 for post in posts if post.created_at >= since)

    async def save(self, post: Post) -> Post:
        """Insert a new post.

        Raises:
            IntegrityError: If the ID or slug is already taken
        """
        if self.store.get("posts", post.id) is not None or await self.slug_exists(
            post.slug
        ):
            raise IntegrityError("Duplicate post slug", None, Exception())
        self.store.insert("posts", post.id, post)
        return post

    async def update(self, post_id: PostId, values: dict[str, Any]) -> Optional[Post]:
        """Overwrite content fields of a post."""
        slug = values.get("slug")
        if slug is not None:
            owner = await self.find_by_slug(slug)
            if owner is not None and owner.id != post_id:
                raise IntegrityError("Duplicate post slug", None, Exception())
        return self.store.update("posts", post_id, values)

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post row."""
        return self.store.delete("posts", post_id) is not None

    async def increment_views(self, post_id: PostId) -> None:
        """Add one view."""
        self.store.add("posts", post_id, "views", 1)

    async def adjust_like_count(self, post_id: PostId, delta: int) -> Optional[int]:
        """Apply a delta to the like counter."""
        return self.store.add("posts", post_id, "like_count", delta)

    async def adjust_comment_count(self, post_id: PostId, delta: int) -> Optional[int]:
        """Apply a delta to the comment counter."""
        return self.store.add("posts", post_id, "comment_count", delta)

    async def set_counters(
        self, post_id: PostId, like_count: int, comment_count: int
    ) -> Optional[Post]:
        """Overwrite both counters."""
        return self.store.update(
            "posts", post_id, {"like_count": like_count, "comment_count": comment_count}
        )
