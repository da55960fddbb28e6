"""Activity feed events.

Events are derived for dashboards and never persisted.
"""

from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import Field

from quill.domain.model.common import DomainModel


class PostCreatedEvent(DomainModel):
    """A post was published."""

    type: Literal["post"] = "post"
    entity_id: UUID
    message: str
    timestamp: datetime


class CommentCreatedEvent(DomainModel):
    """A comment was added to a post."""

    type: Literal["comment"] = "comment"
    entity_id: UUID
    message: str
    timestamp: datetime


class UserRegisteredEvent(DomainModel):
    """A user account was created."""

    type: Literal["user"] = "user"
    entity_id: UUID
    message: str
    timestamp: datetime


ActivityEvent = Annotated[
    Union[PostCreatedEvent, CommentCreatedEvent, UserRegisteredEvent],
    Field(discriminator="type"),
]
