"""Base use case and request-parsing helpers."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from quill.domain.error import NotAuthorizedError, NotFoundError, UnauthenticatedError
from quill.domain.value import Actor, UserId


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_id(raw: str, resource: str) -> UUID:
    """Parse a path identifier; a malformed ID can't name any resource.

    Raises:
        NotFoundError: If ``raw`` is not a UUID
    """
    try:
        return UUID(str(raw))
    except ValueError:
        raise NotFoundError(resource, str(raw))


def require_actor(actor: Actor | None, action: str) -> Actor:
    """Return the actor or fail when the caller is anonymous.

    Raises:
        UnauthenticatedError: If no actor was supplied
    """
    if actor is None:
        raise UnauthenticatedError(action)
    return actor


def require_owner(
    actor: Actor | None,
    owner_id: UserId,
    action: str,
    resource: str,
    resource_id: UUID,
) -> Actor:
    """Allow the owner of a resource and administrators.

    Raises:
        UnauthenticatedError: If no actor was supplied
        NotAuthorizedError: If the actor is neither owner nor admin
    """
    actor = require_actor(actor, f"{action} {resource}")
    if not actor.can_modify(owner_id):
        raise NotAuthorizedError(action, resource, str(resource_id), str(actor.user_id))
    return actor
