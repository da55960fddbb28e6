"""Comment entity.

Comments are threaded discussions on posts. A reply points at its parent
with ``parent_id``; replies are never stored on the parent and are joined
at read time into ``CommentThread`` trees.
"""

from datetime import datetime
from typing import Iterator, Optional

from pydantic import Field, field_validator

from quill.domain.model.common import DomainModel
from quill.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Threading is managed through:
    - parent_id: Direct parent comment (None for top-level), always on the same post
    - depth: Nesting level (0 for top-level, increments with each reply)
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    content: str = Field(min_length=1, max_length=1000)
    parent_id: Optional[CommentId] = None
    depth: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        """Comment text is stored trimmed and never blank."""
        v = v.strip()
        if not v:
            raise ValueError("Comment cannot be blank")
        return v


class CommentThread(DomainModel):
    """A comment together with its replies, oldest first."""

    comment: Comment
    replies: list["CommentThread"] = Field(default_factory=list)


CommentThread.model_rebuild()


def build_threads(comments: list[Comment]) -> list[CommentThread]:
    """Assemble a flat comment list into reply trees.

    Every node is created before replies are attached, so reply chains of
    any depth are assembled without recursion. Replies whose parent is not
    in ``comments`` are dropped, since they cannot be placed in the tree.

    Args:
        comments: Comments of a single post, in any order

    Returns:
        Top-level threads ordered by creation time
    """
    ordered = sorted(comments, key=lambda c: (c.created_at, str(c.id)))
    nodes = {comment.id: CommentThread(comment=comment) for comment in ordered}

    roots: list[CommentThread] = []
    for comment in ordered:
        if comment.parent_id is None:
            roots.append(nodes[comment.id])
        elif comment.parent_id in nodes:
            nodes[comment.parent_id].replies.append(nodes[comment.id])
    return roots


def walk_threads(threads: list[CommentThread]) -> Iterator[Comment]:
    """Yield comments depth-first: each comment, then its replies oldest first."""
    stack = list(reversed(threads))
    while stack:
        thread = stack.pop()
        yield thread.comment
        stack.extend(reversed(thread.replies))
