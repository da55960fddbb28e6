"""User entity.

Users are owned by the identity subsystem. Quill only reads them to check
references and to render activity messages.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from quill.domain.model.common import DomainModel
from quill.domain.value import Role, UserId


class User(DomainModel):
    """Registered user as seen by the content engine."""

    id: UserId
    name: str = Field(min_length=1, max_length=100)
    email: Optional[str] = None
    role: Role = Role.USER
    created_at: datetime = Field(default_factory=datetime.now)
