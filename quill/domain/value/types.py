"""Domain value objects for Quill.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from quill.domain.value.common import RootValueObject, ValueObject
from quill.domain.value.identifiers import UserId


class Category(str, Enum):
    """Fixed set of post categories."""

    FOOD = "food"
    TRAVEL = "travel"
    TECHNOLOGY = "technology"
    LIFESTYLE = "lifestyle"
    BUSINESS = "business"
    HEALTH = "health"
    SOCIAL_MEDIA = "social-media"
    NEWS = "news"
    INTERNATIONAL = "international"
    FACTS = "facts"


class LikeTargetType(str, Enum):
    """Type of entity that can be liked."""

    POST = "post"
    COMMENT = "comment"


class Role(str, Enum):
    """Capability level of an actor."""

    USER = "user"
    ADMIN = "admin"


class Slug(RootValueObject[str]):
    """URL-safe slug for posts.

    Must be lowercase, alphanumeric with hyphens, 1-100 characters.
    Examples: 'my-first-trip', 'ten-facts-about-tea'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) < 1 or len(v) > 100:
            raise ValueError("Slug must be 1-100 characters")
        return v


class Actor(ValueObject):
    """Authenticated caller, supplied by the request layer."""

    user_id: UserId
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def can_modify(self, owner_id: UserId) -> bool:
        """Owners and administrators may modify content."""
        return self.is_admin or self.user_id == owner_id
