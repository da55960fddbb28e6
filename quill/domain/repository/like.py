"""Like repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from quill.domain.model.like import Like
from quill.domain.value import LikeTargetType, UserId


class LikeRepository(ABC):
    """Repository for Like entity.

    Defines the contract for like persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> Optional[Like]:
        """Find a user's like on a specific target.

        Args:
            user_id: The user's ID
            target_type: Type of target (post or comment)
            target_id: ID of the target

        Returns:
            The like if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, like: Like) -> Like:
        """Insert a like.

        Raises:
            IntegrityError: If the user already likes this target
        """
        pass

    @abstractmethod
    async def delete_by_user_and_target(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> bool:
        """Delete a user's like on a target.

        Returns:
            True if a like was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def delete_by_target(self, target_type: LikeTargetType, target_id: UUID) -> int:
        """Delete every like on a target.

        Returns:
            Number of likes deleted
        """
        pass

    @abstractmethod
    async def count_by_target(self, target_type: LikeTargetType, target_id: UUID) -> int:
        """Count likes on a target."""
        pass

    @abstractmethod
    async def lock_pair(
        self,
        user_id: UserId,
        target_type: LikeTargetType,
        target_id: UUID,
    ) -> None:
        """Serialize writers of one (user, target) pair.

        Must be called inside ``UnitOfWork.transaction()``; the lock is held
        until that transaction ends. Other pairs are never blocked.
        """
        pass
