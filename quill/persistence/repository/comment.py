"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import Any, List, Optional

import logfire
from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.model import Comment
from quill.domain.repository import CommentRepository
from quill.domain.value import CommentId, PostId
from quill.persistence.mappers import comment_to_dict, row_to_comment
from quill.persistence.tables import comments_table

_OLDEST_FIRST = (comments_table.c.created_at.asc(), comments_table.c.id.asc())
_NEWEST_FIRST = (comments_table.c.created_at.desc(), comments_table.c.id.asc())


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(self, post_id: PostId) -> List[Comment]:
        """Find all comments for a post, oldest first."""
        with logfire.span("comment_repository.find_by_post", post_id=str(post_id)):
            stmt = (
                select(comments_table)
                .where(comments_table.c.post_id == post_id)
                .order_by(*_OLDEST_FIRST)
            )
            result = await self.session.execute(stmt)
            return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies of a comment."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .order_by(*_OLDEST_FIRST)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_all(self, limit: int = 10, offset: int = 0) -> List[Comment]:
        """Find comments across all posts, newest first."""
        stmt = select(comments_table).order_by(*_NEWEST_FIRST).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_recent(self, limit: int) -> List[Comment]:
        """Find the newest comments."""
        return await self.find_all(limit=limit)

    async def count(self, since: Optional[datetime] = None) -> int:
        """Count comments, optionally since a point in time."""
        stmt = select(func.count()).select_from(comments_table)
        if since is not None:
            stmt = stmt.where(comments_table.c.created_at >= since)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments on a post."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.post_id == post_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        with logfire.span(
            "comment_repository.save",
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
        ):
            stmt = insert(comments_table).values(**comment_to_dict(comment))
            await self.session.execute(stmt)
            await self.session.flush()
            return comment

    async def update(
        self, comment_id: CommentId, values: dict[str, Any]
    ) -> Optional[Comment]:
        """Overwrite content fields of a comment."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(**values)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def delete(self, comment_id: CommentId) -> bool:
        """Delete a comment row."""
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def adjust_like_count(
        self, comment_id: CommentId, delta: int
    ) -> Optional[int]:
        """Atomically apply a delta to the like counter."""
        column = comments_table.c.like_count
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .where(column + delta >= 0)
            .values(like_count=column + delta)
            .returning(column)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_like_count(
        self, comment_id: CommentId, like_count: int
    ) -> Optional[Comment]:
        """Overwrite the like counter."""
        return await self.update(comment_id, {"like_count": like_count})
