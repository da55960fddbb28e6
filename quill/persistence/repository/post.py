"""PostgreSQL implementation of Post repository."""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, List, Optional

import logfire
from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.model import Post
from quill.domain.query import PostQuery
from quill.domain.repository import PostRepository
from quill.domain.value import PostId, Slug
from quill.persistence.mappers import post_to_dict, row_to_post, to_column_value
from quill.persistence.query import apply_order, where_clause
from quill.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def find_by_ids(self, post_ids: Sequence[PostId]) -> List[Post]:
        """Find several posts in one query."""
        if not post_ids:
            return []
        stmt = select(posts_table).where(posts_table.c.id.in_(list(post_ids)))
        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        with logfire.span("post_repository.find_by_slug", slug=str(slug)):
            stmt = select(posts_table).where(posts_table.c.slug == str(slug))
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def slug_exists(self, slug: Slug) -> bool:
        """Check if a slug is taken."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.slug == str(slug))
        )
        result = await self.session.execute(stmt)
        exists = (result.scalar() or 0) > 0
        logfire.debug("Slug existence check", slug=str(slug), exists=exists)
        return exists

    async def find_by_query(self, query: PostQuery) -> List[Post]:
        """Find one page of posts matching a query."""
        with logfire.span(
            "post_repository.find_by_query",
            filters=len(query.filters),
            limit=query.limit,
            offset=query.offset,
        ):
            stmt = select(posts_table).where(where_clause(query))
            stmt = apply_order(stmt, query).limit(query.limit).offset(query.offset)
            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count_by_query(self, query: PostQuery) -> int:
        """Count posts matching the query's filters."""
        stmt = select(func.count()).select_from(posts_table).where(where_clause(query))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_recent(self, limit: int) -> List[Post]:
        """Find the newest posts."""
        stmt = (
            select(posts_table)
            .order_by(posts_table.c.created_at.desc(), posts_table.c.id.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def count(self, since: Optional[datetime] = None) -> int:
        """Count posts, optionally since a point in time."""
        stmt = select(func.count()).select_from(posts_table)
        if since is not None:
            stmt = stmt.where(posts_table.c.created_at >= since)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, post: Post) -> Post:
        """Insert a new post."""
        with logfire.span(
            "post_repository.save", post_id=str(post.id), slug=str(post.slug)
        ):
            stmt = insert(posts_table).values(**post_to_dict(post))
            await self.session.execute(stmt)
            await self.session.flush()
            return post

    async def update(self, post_id: PostId, values: dict[str, Any]) -> Optional[Post]:
        """Overwrite content fields of a post."""
        with logfire.span(
            "post_repository.update", post_id=str(post_id), fields=sorted(values)
        ):
            stmt = (
                update(posts_table)
                .where(posts_table.c.id == post_id)
                .values(**{k: to_column_value(v) for k, v in values.items()})
                .returning(posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if row is None:
                logfire.warn("Post not found for update", post_id=str(post_id))
                return None
            return row_to_post(row._asdict())

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post row."""
        stmt = posts_table.delete().where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def increment_views(self, post_id: PostId) -> None:
        """Atomically add one view."""
        stmt = (
            posts_table.update()
            .where(posts_table.c.id == post_id)
            .values(views=posts_table.c.views + 1)
        )
        await self.session.execute(stmt)

    async def adjust_like_count(self, post_id: PostId, delta: int) -> Optional[int]:
        """Atomically apply a delta to the like counter."""
        return await self._adjust(posts_table.c.like_count, post_id, delta)

    async def adjust_comment_count(self, post_id: PostId, delta: int) -> Optional[int]:
        """Atomically apply a delta to the comment counter."""
        return await self._adjust(posts_table.c.comment_count, post_id, delta)

    async def _adjust(self, column: Any, post_id: PostId, delta: int) -> Optional[int]:
        # The guard keeps the CHECK constraint from firing; no row means drift
        stmt = (
            posts_table.update()
            .where(posts_table.c.id == post_id)
            .where(column + delta >= 0)
            .values({column.name: column + delta})
            .returning(column)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_counters(
        self, post_id: PostId, like_count: int, comment_count: int
    ) -> Optional[Post]:
        """Overwrite both counters."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(like_count=like_count, comment_count=comment_count)
            .returning(posts_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None
