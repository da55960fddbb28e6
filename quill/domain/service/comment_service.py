"""Comment domain service."""

from datetime import datetime
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from quill.domain.error import NotFoundError, ValidationError
from quill.domain.model.comment import Comment
from quill.domain.repository import CommentRepository
from quill.domain.value import CommentId, PostId, UserId

from .base import Service, describe_validation_error


class CommentService(Service):
    """Domain service for comment operations.

    Reference checks (post exists, parent on the same post) are the
    integrity service's job; this service only builds and stores rows.
    """

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        content: str,
        parent: Comment | None = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            content: Comment text
            parent: Already validated parent comment for replies

        Returns:
            Created comment

        Raises:
            ValidationError: If the content is empty or too long
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent.id) if parent else None,
        ):
            now = datetime.now()
            try:
                comment = Comment(
                    id=CommentId(uuid4()),
                    post_id=post_id,
                    author_id=author_id,
                    content=content,
                    parent_id=parent.id if parent else None,
                    depth=parent.depth + 1 if parent else 0,
                    like_count=0,
                    created_at=now,
                    updated_at=now,
                )
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_error(e)) from e

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                depth=saved.depth,
            )
            return saved

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID or raise.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        comment = await self.get_comment_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def get_comments_for_post(self, post_id: PostId) -> list[Comment]:
        """Get all comments for a post, oldest first."""
        with logfire.span(
            "comment_service.get_comments_for_post", post_id=str(post_id)
        ):
            comments = await self.comment_repository.find_by_post(post_id)
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def get_latest_comments(self, limit: int, offset: int = 0) -> list[Comment]:
        """Get comments across all posts, newest first."""
        return await self.comment_repository.find_all(limit=limit, offset=offset)

    async def count_comments(self) -> int:
        """Count comments across all posts."""
        return await self.comment_repository.count()

    async def update_content(self, comment: Comment, content: str) -> Comment:
        """Replace the text of a comment.

        Raises:
            ValidationError: If the new content is empty or too long
            NotFoundError: If the comment disappeared meanwhile
        """
        with logfire.span(
            "comment_service.update_content",
            comment_id=str(comment.id),
            text_length=len(content),
        ):
            try:
                candidate = Comment.model_validate(
                    {**comment.model_dump(), "content": content}
                )
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_error(e)) from e

            updated = await self.comment_repository.update(
                comment.id, {"content": candidate.content, "updated_at": datetime.now()}
            )
            if updated is None:
                logfire.warn("Comment vanished before update", comment_id=str(comment.id))
                raise NotFoundError("Comment", str(comment.id))

            logfire.info("Comment updated", comment_id=str(comment.id))
            return updated
