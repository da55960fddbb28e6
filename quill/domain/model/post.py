"""Post aggregate root.

Posts own their comments and are the authoritative target of likes.
"""

from datetime import datetime

from pydantic import Field, field_validator

from quill.domain.model.common import DomainModel
from quill.domain.value import Category, PostId, Slug, UserId


class Post(DomainModel):
    """Post aggregate root.

    ``like_count`` and ``comment_count`` are denormalized counters owned by
    the counter service; ``views`` only ever grows.
    """

    id: PostId
    slug: Slug
    title: str = Field(min_length=1, max_length=100)
    excerpt: str = Field(min_length=1, max_length=500)
    content: str = Field(min_length=1)
    cover_image: str = "default-cover.jpg"
    category: Category
    tags: list[str] = Field(default_factory=list)
    featured: bool = False
    author_id: UserId
    like_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        """Titles are stored trimmed."""
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be blank")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        """Tags are a set: drop blanks and duplicates, keep first-seen order."""
        seen: dict[str, None] = {}
        for tag in v:
            tag = tag.strip()
            if tag:
                seen.setdefault(tag, None)
        return list(seen)
