"""SQLAlchemy table definitions for Quill.

Tables are used through SQLAlchemy Core; rows are mapped to the immutable
domain models in ``quill.persistence.mappers``. They match the schema
created by the Alembic migrations.

Foreign keys carry no ``ON DELETE`` action: cascades are performed by the
integrity service, children first, so a delete never leaves orphans.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

CATEGORY_VALUES = (
    "food",
    "travel",
    "technology",
    "lifestyle",
    "business",
    "health",
    "social-media",
    "news",
    "international",
    "facts",
)

# ============================================================================
# USERS TABLE (owned by the identity subsystem, read here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=True),
    Column(
        "role",
        Enum("user", "admin", name="user_role", create_type=False),
        nullable=False,
        server_default="user",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_created_at", users_table.c.created_at.desc())

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("slug", String(100), nullable=False, unique=True),
    Column("title", String(100), nullable=False),
    Column("excerpt", String(500), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "cover_image",
        String(500),
        nullable=False,
        server_default="default-cover.jpg",
    ),
    Column(
        "category",
        Enum(*CATEGORY_VALUES, name="post_category", create_type=False),
        nullable=False,
    ),
    Column("tags", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column("featured", Boolean, nullable=False, server_default="false"),
    Column("author_id", UUID(as_uuid=True), ForeignKey("users.id"), nullable=False),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column("views", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("like_count >= 0", name="post_like_count_non_negative"),
    CheckConstraint("comment_count >= 0", name="post_comment_count_non_negative"),
    CheckConstraint("views >= 0", name="post_views_non_negative"),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_category", posts_table.c.category)
Index("idx_posts_tags", posts_table.c.tags, postgresql_using="gin")

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("post_id", UUID(as_uuid=True), ForeignKey("posts.id"), nullable=False),
    Column("author_id", UUID(as_uuid=True), ForeignKey("users.id"), nullable=False),
    Column("content", String(1000), nullable=False),
    Column(
        "parent_id", UUID(as_uuid=True), ForeignKey("comments.id"), nullable=True
    ),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("depth >= 0", name="comment_depth_non_negative"),
    CheckConstraint("like_count >= 0", name="comment_like_count_non_negative"),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_created_at", comments_table.c.created_at.desc())

# ============================================================================
# LIKES TABLE (polymorphic target, no FK on target_id)
# ============================================================================
likes_table = Table(
    "likes",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("user_id", UUID(as_uuid=True), ForeignKey("users.id"), nullable=False),
    Column(
        "target_type",
        Enum("post", "comment", name="like_target_type", create_type=False),
        nullable=False,
    ),
    Column("target_id", UUID(as_uuid=True), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "target_type", "target_id", name="unique_like"),
)

Index("idx_likes_target", likes_table.c.target_type, likes_table.c.target_id)
