"""In-memory user repository for testing."""

from collections.abc import Sequence
from datetime import datetime
from typing import List, Optional

from quill.domain.model.user import User
from quill.domain.repository.user import UserRepository
from quill.domain.value import UserId

from .store import InMemoryStore


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self.store = store

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self.store.get("users", user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users at once."""
        found = (self.store.get("users", user_id) for user_id in user_ids)
        return [user for user in found if user is not None]

    async def find_recent(self, limit: int) -> List[User]:
        """Find the most recently registered users."""
        users = sorted(self.store.rows("users"), key=lambda u: str(u.id))
        users.sort(key=lambda u: u.created_at, reverse=True)
        return users[:limit]

    async def count(self, since: Optional[datetime] = None) -> int:
        """Count users, optionally since a point in time."""
        users = self.store.rows("users")
        if since is None:
            return len(users)
        return sum(1 for u in users if u.created_at >= since)

    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        if self.store.get("users", user.id) is not None:
            self.store.update("users", user.id, dict(user))
        else:
            self.store.insert("users", user.id, user)
        return user
