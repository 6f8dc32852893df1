"""SQLAlchemy table definitions for Quill.

These table definitions are used with SQLAlchemy Core. They match the
schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),  # Lower-cased
    Column("username", String(100), nullable=False, unique=True),
    Column("password_hash", Text, nullable=False),
    Column("role", String(20), nullable=False, server_default="user"),
    Column("is_premium", Boolean, nullable=False, server_default="false"),
    Column("refresh_token", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("role IN ('user', 'admin')", name="valid_role"),
)

Index("idx_users_refresh_token", users_table.c.refresh_token)

# ============================================================================
# CATEGORIES TABLE
# ============================================================================
categories_table = Table(
    "categories",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(100), nullable=False, unique=True),
    Column("slug", String(100), nullable=False, unique=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# TAGS TABLE
# ============================================================================
tags_table = Table(
    "tags",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("name", String(100), nullable=False, unique=True),
    Column("slug", String(100), nullable=False, unique=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("title", String(300), nullable=False),
    Column("slug", String(100), nullable=False),
    Column("content", Text, nullable=False),
    Column("markdown", Text, nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("cover_image", Text, nullable=True),  # Blob store key, not a URL
    Column("is_premium", Boolean, nullable=False, server_default="false"),
    Column("published", Boolean, nullable=False, server_default="false"),
    Column("post_type", String(50), nullable=False, server_default="article"),
    Column("views", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("views >= 0", name="views_non_negative"),
)

Index("idx_posts_slug", posts_table.c.slug, unique=True)
Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_created_at", posts_table.c.created_at)
Index("idx_posts_published", posts_table.c.published)

# ============================================================================
# POST_CATEGORIES TABLE (Many-to-Many, ordered)
# ============================================================================
post_categories_table = Table(
    "post_categories",
    metadata,
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "category_id",
        UUID,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("position", Integer, nullable=False, server_default="0"),
    UniqueConstraint("post_id", "category_id", name="uq_post_category"),
)

Index("idx_post_categories_post_id", post_categories_table.c.post_id)
Index("idx_post_categories_category_id", post_categories_table.c.category_id)

# ============================================================================
# POST_TAGS TABLE (Many-to-Many, ordered)
# ============================================================================
post_tags_table = Table(
    "post_tags",
    metadata,
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("tag_id", UUID, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False),
    Column("position", Integer, nullable=False, server_default="0"),
    UniqueConstraint("post_id", "tag_id", name="uq_post_tag"),
)

Index("idx_post_tags_post_id", post_tags_table.c.post_id)
Index("idx_post_tags_tag_id", post_tags_table.c.tag_id)
