"""Referential integrity of the content graph.

Owns the reference checks done before a write and the cascading deletes:

- a post owns its comments (transitively, through replies) and every like
  on the post or on one of its comments
- a comment owns its reply subtree and the likes on every comment in it

Cascades run children first inside a single ``UnitOfWork`` transaction,
so a failure part way leaves the graph untouched.
"""

import logfire

from quill.domain.error import NotFoundError, ValidationError
from quill.domain.model.comment import Comment
from quill.domain.model.post import Post
from quill.domain.model.user import User
from quill.domain.repository import (
    CommentRepository,
    LikeRepository,
    PostRepository,
    UnitOfWork,
    UserRepository,
)
from quill.domain.value import CommentId, LikeTargetType, PostId, UserId
from quill.domain.value.common import ValueObject

from .base import Service
from .counter_service import CounterService


class CascadeResult(ValueObject):
    """Rows removed by a cascading delete."""

    comments: int = 0
    likes: int = 0


class IntegrityService(Service):
    """Reference checks and cascading deletes."""

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
        user_repository: UserRepository,
        unit_of_work: UnitOfWork,
        counter_service: CounterService,
    ) -> None:
        """Initialize integrity service.

        Args:
            post_repository: Post repository
            comment_repository: Comment repository
            like_repository: Like repository
            user_repository: User repository
            unit_of_work: Transaction boundary for cascades
            counter_service: Counter maintenance for comment deletes
        """
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.like_repository = like_repository
        self.user_repository = user_repository
        self.unit_of_work = unit_of_work
        self.counter_service = counter_service

    async def require_post(self, post_id: PostId) -> Post:
        """Load a post that must exist.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post = await self.post_repository.find_by_id(post_id)
        if post is None:
            logfire.warn("Referenced post missing", post_id=str(post_id))
            raise NotFoundError("Post", str(post_id))
        return post

    async def require_user(self, user_id: UserId) -> User:
        """Load a user that must exist.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            logfire.warn("Referenced user missing", user_id=str(user_id))
            raise NotFoundError("User", str(user_id))
        return user

    async def resolve_parent(
        self, post_id: PostId, parent_id: CommentId | None
    ) -> Comment | None:
        """Check that a reply's parent exists and sits on the same post.

        Args:
            post_id: Post the reply is written on
            parent_id: Parent comment ID, None for top-level comments

        Returns:
            The parent comment, or None for top-level comments

        Raises:
            ValidationError: If the parent is missing or on another post
        """
        if parent_id is None:
            return None

        parent = await self.comment_repository.find_by_id(parent_id)
        if parent is None:
            raise ValidationError(f"Parent comment not found: {parent_id}")
        if parent.post_id != post_id:
            logfire.warn(
                "Reply parent on a different post",
                post_id=str(post_id),
                parent_id=str(parent_id),
                parent_post_id=str(parent.post_id),
            )
            raise ValidationError("Parent comment belongs to a different post")
        return parent

    async def delete_post(self, post_id: PostId) -> CascadeResult:
        """Delete a post with all its comments and likes.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("integrity_service.delete_post", post_id=str(post_id)):
            async with self.unit_of_work.transaction():
                await self.require_post(post_id)

                comments = await self.comment_repository.find_by_post(post_id)
                likes = 0
                for comment in _post_order(comments):
                    likes += await self.like_repository.delete_by_target(
                        LikeTargetType.COMMENT, comment.id
                    )
                    await self.comment_repository.delete(comment.id)

                likes += await self.like_repository.delete_by_target(
                    LikeTargetType.POST, post_id
                )
                if not await self.post_repository.delete(post_id):
                    raise NotFoundError("Post", str(post_id))

            result = CascadeResult(comments=len(comments), likes=likes)
            logfire.info(
                "Post deleted",
                post_id=str(post_id),
                comments=result.comments,
                likes=result.likes,
            )
            return result

    async def delete_comment(self, comment_id: CommentId) -> CascadeResult:
        """Delete a comment with its reply subtree and their likes.

        The post's comment counter drops by the number of comments removed.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span(
            "integrity_service.delete_comment", comment_id=str(comment_id)
        ):
            async with self.unit_of_work.transaction():
                root = await self.comment_repository.find_by_id(comment_id)
                if root is None:
                    raise NotFoundError("Comment", str(comment_id))

                subtree = await self._collect_subtree(root)
                likes = 0
                for comment in subtree:
                    likes += await self.like_repository.delete_by_target(
                        LikeTargetType.COMMENT, comment.id
                    )
                    await self.comment_repository.delete(comment.id)

                await self.counter_service.adjust_comment_count(
                    root.post_id, -len(subtree)
                )

            result = CascadeResult(comments=len(subtree), likes=likes)
            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                post_id=str(root.post_id),
                comments=result.comments,
                likes=result.likes,
            )
            return result

    async def _collect_subtree(self, root: Comment) -> list[Comment]:
        """Return ``root`` and all its replies, children before parents."""
        ordered: list[Comment] = []
        # Iterative DFS; each node is emitted after all of its descendants
        stack: list[tuple[Comment, bool]] = [(root, False)]
        while stack:
            comment, expanded = stack.pop()
            if expanded:
                ordered.append(comment)
                continue
            stack.append((comment, True))
            for child in await self.comment_repository.find_children(comment.id):
                stack.append((child, False))
        return ordered


def _post_order(comments: list[Comment]) -> list[Comment]:
    """Order the comments of one post so replies come before their parents."""
    children: dict[CommentId | None, list[Comment]] = {}
    known = {comment.id for comment in comments}
    for comment in comments:
        parent = comment.parent_id if comment.parent_id in known else None
        children.setdefault(parent, []).append(comment)

    ordered: list[Comment] = []
    stack: list[tuple[Comment, bool]] = [(c, False) for c in children.get(None, [])]
    while stack:
        comment, expanded = stack.pop()
        if expanded:
            ordered.append(comment)
            continue
        stack.append((comment, True))
        stack.extend((child, False) for child in children.get(comment.id, []))
    return ordered
