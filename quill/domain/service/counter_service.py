"""Denormalized counter maintenance.

``Post.like_count``, ``Post.comment_count`` and ``Comment.like_count`` are
changed only by atomic deltas applied in the same transaction as the row
insert or delete they mirror. When a delta cannot be applied (missing row,
or the counter would go negative) the counter has drifted: the violation is
logged and the counter is recomputed from source rows.
"""

from typing import Optional
from uuid import UUID

import logfire

from quill.domain.error import IntegrityViolationError, NotFoundError
from quill.domain.model.comment import Comment
from quill.domain.model.post import Post
from quill.domain.repository import CommentRepository, LikeRepository, PostRepository
from quill.domain.value import CommentId, LikeTargetType, PostId

from .base import Service


class CounterService(Service):
    """Applies counter deltas and repairs drift."""

    def __init__(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        like_repository: LikeRepository,
    ) -> None:
        """Initialize counter service.

        Args:
            post_repository: Post repository
            comment_repository: Comment repository
            like_repository: Like repository
        """
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.like_repository = like_repository

    async def adjust_post_likes(self, post_id: PostId, delta: int) -> int:
        """Apply a like delta to a post, reconciling on drift.

        Returns:
            The post's like count afterwards
        """
        try:
            value = await self.post_repository.adjust_like_count(post_id, delta)
            return self._checked(value, "Post", post_id, "like_count", delta)
        except IntegrityViolationError as e:
            self._log_violation(e, delta)
            post = await self.reconcile_post(post_id)
            return post.like_count

    async def adjust_comment_count(self, post_id: PostId, delta: int) -> int:
        """Apply a comment delta to a post, reconciling on drift.

        Returns:
            The post's comment count afterwards
        """
        try:
            value = await self.post_repository.adjust_comment_count(post_id, delta)
            return self._checked(value, "Post", post_id, "comment_count", delta)
        except IntegrityViolationError as e:
            self._log_violation(e, delta)
            post = await self.reconcile_post(post_id)
            return post.comment_count

    async def adjust_comment_likes(self, comment_id: CommentId, delta: int) -> int:
        """Apply a like delta to a comment, reconciling on drift.

        Returns:
            The comment's like count afterwards
        """
        try:
            value = await self.comment_repository.adjust_like_count(comment_id, delta)
            return self._checked(value, "Comment", comment_id, "like_count", delta)
        except IntegrityViolationError as e:
            self._log_violation(e, delta)
            comment = await self.reconcile_comment(comment_id)
            return comment.like_count

    async def reconcile_post(self, post_id: PostId) -> Post:
        """Recompute a post's counters from its like and comment rows.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("counter_service.reconcile_post", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                raise NotFoundError("Post", str(post_id))

            like_count = await self.like_repository.count_by_target(
                LikeTargetType.POST, post_id
            )
            comment_count = await self.comment_repository.count_by_post(post_id)

            if (like_count, comment_count) == (post.like_count, post.comment_count):
                logfire.info("Post counters consistent", post_id=str(post_id))
                return post

            logfire.warn(
                "Post counters drifted, repairing",
                post_id=str(post_id),
                stored_likes=post.like_count,
                actual_likes=like_count,
                stored_comments=post.comment_count,
                actual_comments=comment_count,
            )
            updated = await self.post_repository.set_counters(
                post_id, like_count=like_count, comment_count=comment_count
            )
            if updated is None:
                raise NotFoundError("Post", str(post_id))
            return updated

    async def reconcile_comment(self, comment_id: CommentId) -> Comment:
        """Recompute a comment's like counter from its like rows.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        with logfire.span(
            "counter_service.reconcile_comment", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", str(comment_id))

            like_count = await self.like_repository.count_by_target(
                LikeTargetType.COMMENT, comment_id
            )
            if like_count == comment.like_count:
                return comment

            logfire.warn(
                "Comment like counter drifted, repairing",
                comment_id=str(comment_id),
                stored_likes=comment.like_count,
                actual_likes=like_count,
            )
            updated = await self.comment_repository.set_like_count(comment_id, like_count)
            if updated is None:
                raise NotFoundError("Comment", str(comment_id))
            return updated

    @staticmethod
    def _checked(
        value: Optional[int], resource: str, identifier: UUID, counter: str, delta: int
    ) -> int:
        if value is None:
            raise IntegrityViolationError(
                f"Cannot apply {delta:+d} to {resource.lower()} {counter}",
                resource=resource,
                identifier=str(identifier),
            )
        return value

    @staticmethod
    def _log_violation(error: IntegrityViolationError, delta: int) -> None:
        logfire.error(
            "Counter integrity violation",
            resource=error.resource,
            identifier=error.identifier,
            delta=delta,
            error=str(error),
        )
