"""In-memory like repository for testing."""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from quill.domain.model.like import Like
from quill.domain.repository.like import LikeRepository
from quill.domain.value import LikeTargetType, UserId

from .store import InMemoryStore


class InMemoryLikeRepository(LikeRepository):
    """In-memory implementation of LikeRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    def _on_target(self, target_type: LikeTargetType, target_id: UUID) -> list[Like]:
        return [
            like
            for like in self.store.rows("likes")
            if like.target_type == target_type and like.target_id == target_id
        ]

    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> Optional[Like]:
        """Find a user's like on a target."""
        for like in self._on_target(target_type, target_id):
            if like.user_id == user_id:
                return like
        return None

    async def save(self, like: Like) -> Like:
        """Save a like.

        Raises:
            IntegrityError: If the user already likes the target
        """
        existing = await self.find_by_user_and_target(
            like.user_id, like.target_type, like.target_id
        )
        if existing:
            raise IntegrityError("Duplicate like", None, Exception())

        self.store.insert("likes", like.id, like)
        return like

    async def delete_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> bool:
        """Delete a user's like on a target."""
        like = await self.find_by_user_and_target(user_id, target_type, target_id)
        if like is None:
            return False
        return self.store.delete("likes", like.id) is not None

    async def delete_by_target(self, target_type: LikeTargetType, target_id: UUID) -> int:
        """Delete every like on a target."""
        likes = self._on_target(target_type, target_id)
        for like in likes:
            self.store.delete("likes", like.id)
        return len(likes)

    async def count_by_target(self, target_type: LikeTargetType, target_id: UUID) -> int:
        """Count likes on a target."""
        return len(self._on_target(target_type, target_id))

    async def lock_pair(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> None:
        """Hold the pair's lock until the transaction ends."""
        await self.store.lock(("like", user_id, target_type, target_id))
