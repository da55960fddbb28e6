"""Like toggle state machine.

Each (user, target) pair is either NotLiked or Liked. A toggle flips the
state: NotLiked -> Liked inserts a like and adds one to the target's
counter, Liked -> NotLiked deletes it and subtracts one. Row change and
counter delta happen in the same transaction, under a per-pair lock, so
the counter always equals the number of like rows.
"""

from datetime import datetime
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from quill.domain.error import ConflictError, NotFoundError
from quill.domain.model.like import Like
from quill.domain.repository import (
    CommentRepository,
    LikeRepository,
    PostRepository,
    UnitOfWork,
)
from quill.domain.value import CommentId, LikeId, LikeTargetType, PostId, UserId
from quill.domain.value.common import ValueObject

from .base import Service
from .counter_service import CounterService

# A duplicate-insert race is retried once before giving up
MAX_ATTEMPTS = 2


class LikeToggleResult(ValueObject):
    """State of a (user, target) pair after a toggle."""

    liked: bool
    total_likes: int


class LikeService(Service):
    """Domain service for like operations."""

    def __init__(
        self,
        like_repository: LikeRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        counter_service: CounterService,
        unit_of_work: UnitOfWork,
    ) -> None:
        """Initialize like service.

        Args:
            like_repository: Like repository
            post_repository: Post repository (target lookup)
            comment_repository: Comment repository (target lookup)
            counter_service: Counter maintenance
            unit_of_work: Transaction boundary
        """
        self.like_repository = like_repository
        self.post_repository = post_repository
        self.comment_repository = comment_repository
        self.counter_service = counter_service
        self.unit_of_work = unit_of_work

    async def toggle_post_like(
        self, post_id: PostId, user_id: UserId
    ) -> LikeToggleResult:
        """Like a post, or remove the user's like if it exists.

        Raises:
            NotFoundError: If the post doesn't exist
            ConflictError: If the toggle lost a uniqueness race twice
        """
        with logfire.span(
            "like_service.toggle_post_like", post_id=str(post_id), user_id=str(user_id)
        ):
            return await self._toggle(user_id, LikeTargetType.POST, post_id)

    async def toggle_comment_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> LikeToggleResult:
        """Like a comment, or remove the user's like if it exists.

        Raises:
            NotFoundError: If the comment doesn't exist
            ConflictError: If the toggle lost a uniqueness race twice
        """
        with logfire.span(
            "like_service.toggle_comment_like",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            return await self._toggle(user_id, LikeTargetType.COMMENT, comment_id)

    async def has_liked(
        self, user_id: UserId, target_type: LikeTargetType, target_id: UUID
    ) -> bool:
        """Check whether the user currently likes the target."""
        like = await self.like_repository.find_by_user_and_target(
            user_id, target_type, target_id
        )
        return like is not None

    async def _toggle(
        self, user_id: UserId, target_type: LikeTargetType, target_id: UUID
    ) -> LikeToggleResult:
        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                # A fresh transaction per attempt re-reads the pair's state
                async with self.unit_of_work.transaction():
                    await self._require_target(target_type, target_id)
                    await self.like_repository.lock_pair(user_id, target_type, target_id)
                    return await self._flip(user_id, target_type, target_id)
            except IntegrityError:
                logfire.warn(
                    "Like toggle lost a uniqueness race",
                    user_id=str(user_id),
                    target_type=target_type.value,
                    target_id=str(target_id),
                    attempt=attempt,
                )

        raise ConflictError(
            f"Concurrent like toggles on {target_type.value} {target_id}, try again"
        )

    async def _flip(
        self, user_id: UserId, target_type: LikeTargetType, target_id: UUID
    ) -> LikeToggleResult:
        existing = await self.like_repository.find_by_user_and_target(
            user_id, target_type, target_id
        )

        if existing is None:
            like = Like(
                id=LikeId(uuid4()),
                user_id=user_id,
                target_type=target_type,
                target_id=target_id,
                created_at=datetime.now(),
            )
            # Raises IntegrityError if a concurrent writer inserted first
            await self.like_repository.save(like)
            total = await self._adjust(target_type, target_id, 1)
            logfire.info(
                "Like added",
                user_id=str(user_id),
                target_type=target_type.value,
                target_id=str(target_id),
                total_likes=total,
            )
            return LikeToggleResult(liked=True, total_likes=total)

        deleted = await self.like_repository.delete_by_user_and_target(
            user_id, target_type, target_id
        )
        total = (
            await self._adjust(target_type, target_id, -1)
            if deleted
            else await self._count(target_type, target_id)
        )
        logfire.info(
            "Like removed",
            user_id=str(user_id),
            target_type=target_type.value,
            target_id=str(target_id),
            total_likes=total,
        )
        return LikeToggleResult(liked=False, total_likes=total)

    async def _require_target(self, target_type: LikeTargetType, target_id: UUID) -> None:
        if target_type == LikeTargetType.POST:
            found = await self.post_repository.find_by_id(PostId(target_id))
            resource = "Post"
        else:
            found = await self.comment_repository.find_by_id(CommentId(target_id))
            resource = "Comment"
        if found is None:
            logfire.warn("Like on non-existent target", target_id=str(target_id))
            raise NotFoundError(resource, str(target_id))

    async def _adjust(self, target_type: LikeTargetType, target_id: UUID, delta: int) -> int:
        if target_type == LikeTargetType.POST:
            return await self.counter_service.adjust_post_likes(PostId(target_id), delta)
        return await self.counter_service.adjust_comment_likes(CommentId(target_id), delta)

    async def _count(self, target_type: LikeTargetType, target_id: UUID) -> int:
        if target_type == LikeTargetType.POST:
            post = await self.post_repository.find_by_id(PostId(target_id))
            return post.like_count if post else 0
        comment = await self.comment_repository.find_by_id(CommentId(target_id))
        return comment.like_count if comment else 0
