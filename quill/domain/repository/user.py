"""User repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import List, Optional

from quill.domain.model.user import User
from quill.domain.value import UserId


class UserRepository(ABC):
    """Read access to users owned by the identity subsystem."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users at once (batch query, unknown IDs are skipped)."""
        pass

    @abstractmethod
    async def find_recent(self, limit: int) -> List[User]:
        """Find the most recently registered users, newest first."""
        pass

    @abstractmethod
    async def count(self, since: Optional[datetime] = None) -> int:
        """Count users, optionally only those created at or after ``since``."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass
