"""Post domain service."""

import re
from datetime import datetime
from typing import Any
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from quill.domain.error import ConflictError, NotFoundError, ValidationError
from quill.domain.model.post import Post
from quill.domain.query import FieldFilter, FilterOperator, PostQuery
from quill.domain.repository import PostRepository
from quill.domain.value import Category, PostId, Slug, UserId

from .base import Service, describe_validation_error

# Fields an author (or admin) may change after creation
EDITABLE_FIELDS = frozenset(
    {"title", "excerpt", "content", "cover_image", "category", "tags", "featured"}
)


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def create_post(
        self,
        author_id: UserId,
        title: str | None,
        excerpt: str | None,
        content: str | None,
        category: Category | str | None,
        tags: list[str] | None = None,
        featured: bool = False,
        cover_image: str | None = None,
    ) -> Post:
        """Create and store a new post.

        The slug is derived from the title once, here.

        Returns:
            Saved post

        Raises:
            ValidationError: If a required field is missing or invalid
            ConflictError: If a concurrent writer took the same slug
        """
        with logfire.span(
            "post_service.create_post", author_id=str(author_id), title=title
        ):
            missing = [
                name
                for name, value in (
                    ("title", title),
                    ("excerpt", excerpt),
                    ("content", content),
                    ("category", category),
                )
                if value is None
            ]
            if missing:
                raise ValidationError(f"Missing required fields: {', '.join(missing)}")

            post_id = PostId(uuid4())
            slug = await self.generate_unique_slug(title, post_id)

            now = datetime.now()
            data: dict[str, Any] = {
                "id": post_id,
                "slug": slug,
                "title": title,
                "excerpt": excerpt,
                "content": content,
                "category": category,
                "tags": tags or [],
                "featured": featured,
                "author_id": author_id,
                "like_count": 0,
                "comment_count": 0,
                "views": 0,
                "created_at": now,
                "updated_at": now,
            }
            if cover_image:
                data["cover_image"] = cover_image

            try:
                post = Post.model_validate(data)
            except PydanticValidationError as e:
                logfire.warn("Invalid post", author_id=str(author_id), errors=e.errors())
                raise ValidationError(describe_validation_error(e)) from e

            try:
                saved = await self.post_repository.save(post)
            except IntegrityError as e:
                logfire.warn("Slug taken concurrently", slug=str(slug))
                raise ConflictError(f"Slug already in use: {slug}") from e

            logfire.info("Post created", post_id=str(saved.id), slug=str(saved.slug))
            return saved

    async def get_post_by_id(self, post_id: PostId) -> Post | None:
        """Get a post by ID.

        Args:
            post_id: Post ID

        Returns:
            Post if found, None otherwise
        """
        with logfire.span("post_service.get_post_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)

            if post:
                logfire.info("Post found", post_id=str(post_id), title=post.title)
            else:
                logfire.warn("Post not found", post_id=str(post_id))

            return post

    async def get_post(self, post_id: PostId) -> Post:
        """Get a post by ID or raise.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        post = await self.get_post_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", str(post_id))
        return post

    async def view_post(self, post_id: PostId) -> Post:
        """Read the detail view of a post, counting one view.

        The view increment is best effort and happens outside any
        transaction; the returned post reflects it.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("post_service.view_post", post_id=str(post_id)):
            await self.get_post(post_id)
            await self.post_repository.increment_views(post_id)

            # Re-read so the caller sees the increment (and any concurrent ones)
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                raise NotFoundError("Post", str(post_id))

            logfire.info("Post viewed", post_id=str(post_id), views=post.views)
            return post

    async def list_posts(self, query: PostQuery) -> tuple[list[Post], int]:
        """Run a post query.

        Args:
            query: Validated post query

        Returns:
            Posts on the requested page and the total number of matches
        """
        with logfire.span(
            "post_service.list_posts",
            filters=[f"{f.field}[{f.operator.value}]" for f in query.filters],
            page=query.page,
            limit=query.limit,
        ):
            total = await self.post_repository.count_by_query(query)
            posts = await self.post_repository.find_by_query(query)
            logfire.info("Posts listed", count=len(posts), total=total)
            return posts, total

    async def get_featured_posts(self, limit: int) -> list[Post]:
        """Most recent featured posts."""
        query = PostQuery(
            filters=(
                FieldFilter(field="featured", operator=FilterOperator.EQ, value=True),
            ),
            limit=limit,
        )
        return await self.post_repository.find_by_query(query)

    async def get_related_posts(self, post: Post, limit: int) -> list[Post]:
        """Most recent posts in the same category, excluding ``post`` itself."""
        with logfire.span(
            "post_service.get_related_posts",
            post_id=str(post.id),
            category=post.category.value,
        ):
            query = PostQuery(
                filters=(
                    FieldFilter(
                        field="category",
                        operator=FilterOperator.EQ,
                        value=post.category,
                    ),
                ),
                # One extra row in case the post itself is among the results
                limit=limit + 1,
            )
            posts = await self.post_repository.find_by_query(query)
            related = [p for p in posts if p.id != post.id][:limit]
            logfire.info("Related posts found", post_id=str(post.id), count=len(related))
            return related

    async def update_post(
        self,
        post: Post,
        changes: dict[str, Any],
        regenerate_slug: bool = False,
    ) -> Post:
        """Apply an edit to a post.

        The slug is kept on title edits unless ``regenerate_slug`` is set.

        Args:
            post: Current post
            changes: New values for editable fields
            regenerate_slug: Derive a fresh slug from the (new) title

        Returns:
            Updated post

        Raises:
            ValidationError: If a field is not editable or a value is invalid
            NotFoundError: If the post disappeared meanwhile
        """
        with logfire.span(
            "post_service.update_post",
            post_id=str(post.id),
            fields=sorted(changes),
            regenerate_slug=regenerate_slug,
        ):
            unknown = set(changes) - EDITABLE_FIELDS
            if unknown:
                raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")

            values = dict(changes)
            values["updated_at"] = datetime.now()

            # Validate the merged entity before touching the store
            try:
                candidate = Post.model_validate({**post.model_dump(), **values})
            except PydanticValidationError as e:
                logfire.warn("Invalid post update", post_id=str(post.id), errors=e.errors())
                raise ValidationError(describe_validation_error(e)) from e

            if regenerate_slug:
                # Re-slugging to the current slug is a no-op, not a collision
                if self.slugify(candidate.title) != str(post.slug):
                    slug = await self.generate_unique_slug(candidate.title, post.id)
                    values["slug"] = slug
                    candidate = candidate.model_copy(update={"slug": slug})

            stored = {name: getattr(candidate, name) for name in values}
            try:
                updated = await self.post_repository.update(post.id, stored)
            except IntegrityError as e:
                raise ConflictError(f"Slug already in use: {values.get('slug')}") from e

            if updated is None:
                raise NotFoundError("Post", str(post.id))

            logfire.info("Post updated", post_id=str(post.id))
            return updated

    async def generate_unique_slug(self, title: str, post_id: PostId) -> Slug:
        """Generate a unique slug from a title.

        Handles collisions by appending numeric suffixes.

        Args:
            title: Post title to slugify
            post_id: Post ID (used for fallback if title produces empty slug)

        Returns:
            Unique slug for the post
        """
        with logfire.span(
            "post_service.generate_unique_slug",
            post_id=str(post_id),
            title=title,
        ):
            base_slug_str = self.slugify(title)

            # Fallback for titles without any usable characters
            if not base_slug_str:
                fallback = f"post-{post_id.hex[:8]}"
                logfire.info(
                    "Using fallback slug for empty title",
                    post_id=str(post_id),
                    slug=fallback,
                )
                return Slug(fallback)

            # Handle collisions with numeric suffix
            slug_str = base_slug_str
            counter = 1
            while await self.post_repository.slug_exists(Slug(slug_str)):
                suffix = f"-{counter}"
                # Ensure we don't exceed 100 chars with suffix
                slug_str = base_slug_str[: 100 - len(suffix)].rstrip("-") + suffix
                counter += 1
                logfire.debug(
                    "Slug collision, trying with suffix",
                    base_slug=base_slug_str,
                    attempt=slug_str,
                    counter=counter,
                )

            slug = Slug(slug_str)
            logfire.info(
                "Generated unique slug",
                post_id=str(post_id),
                slug=str(slug),
                had_collision=counter > 1,
            )
            return slug

    @staticmethod
    def slugify(title: str) -> str:
        """Convert a title to its slug.

        - Converts to lowercase
        - Strips every character that is not alphanumeric or a space
        - Replaces runs of spaces with a single hyphen
        - Strips leading/trailing hyphens and truncates to 100 characters

        Args:
            title: Title to slugify

        Returns:
            Slug string (may be empty if title has no valid chars)
        """
        slug = re.sub(r"[^a-z0-9 ]+", "", title.lower())
        slug = re.sub(r" +", "-", slug.strip())
        return slug[:100].strip("-")
