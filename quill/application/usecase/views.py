"""Response views shared by several use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from quill.domain.model import Comment, Post


class PostView(BaseModel):
    """Post as returned to callers."""

    id: str
    slug: str
    title: str
    excerpt: str
    content: str
    cover_image: str
    category: str
    tags: list[str]
    featured: bool
    author_id: str
    like_count: int
    comment_count: int
    views: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, post: Post) -> "PostView":
        return cls(
            id=str(post.id),
            slug=str(post.slug),
            title=post.title,
            excerpt=post.excerpt,
            content=post.content,
            cover_image=post.cover_image,
            category=post.category.value,
            tags=list(post.tags),
            featured=post.featured,
            author_id=str(post.author_id),
            like_count=post.like_count,
            comment_count=post.comment_count,
            views=post.views,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class CommentView(BaseModel):
    """Comment as returned to callers."""

    id: str
    post_id: str
    author_id: str
    content: str
    parent_id: Optional[str]
    depth: int
    like_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentView":
        return cls(
            id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            content=comment.content,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            depth=comment.depth,
            like_count=comment.like_count,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
