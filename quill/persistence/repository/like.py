"""PostgreSQL implementation of Like repository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import and_, delete, func, insert, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.model import Like
from quill.domain.repository import LikeRepository
from quill.domain.value import LikeTargetType, UserId
from quill.persistence.mappers import like_to_dict, row_to_like
from quill.persistence.tables import likes_table


class PostgresLikeRepository(LikeRepository):
    """PostgreSQL implementation of LikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _pair(self, user_id: UserId, target_type: LikeTargetType, target_id: UUID):
        return and_(
            likes_table.c.user_id == user_id,
            likes_table.c.target_type == target_type.value,
            likes_table.c.target_id == target_id,
        )

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> Optional[Like]:
        """Find a user's like on a specific target."""
        stmt = select(likes_table).where(self._pair(user_id, target_type, target_id))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_like(row._asdict()) if row else None

    async def save(self, like: Like) -> Like:
        """Insert a like (unique constraint guards duplicates)."""
        stmt = insert(likes_table).values(**like_to_dict(like))
        await self.session.execute(stmt)
        await self.session.flush()
        return like

    async def delete_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> bool:
        """Delete a user's like on a target."""
        stmt = delete(likes_table).where(self._pair(user_id, target_type, target_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_by_target(self, target_type: LikeTargetType, target_id: UUID) -> int:
        """Delete every like on a target."""
        stmt = delete(likes_table).where(
            likes_table.c.target_type == target_type.value,
            likes_table.c.target_id == target_id,
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def count_by_target(self, target_type: LikeTargetType, target_id: UUID) -> int:
        """Count likes on a target."""
        stmt = (
            select(func.count())
            .select_from(likes_table)
            .where(
                likes_table.c.target_type == target_type.value,
                likes_table.c.target_id == target_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def lock_pair(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> None:
        """Take a transaction-scoped advisory lock on the pair."""
        key = f"like:{user_id}:{target_type.value}:{target_id}"
        await self.session.execute(
            text("SELECT pg_advisory_xact_lock(hashtextextended(:key, 0))"),
            {"key": key},
        )
