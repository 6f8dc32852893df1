"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from quill.domain.model import Category, Post, Tag, User
from quill.domain.value import (
    BlobRef,
    CategoryId,
    PostId,
    Role,
    Slug,
    TagId,
    UserId,
)


def _as_uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_as_uuid(row["id"])),
        name=row["name"],
        email=row["email"],
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        is_premium=row["is_premium"],
        refresh_token=row.get("refresh_token"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_category(row: Dict[str, Any]) -> Category:
    """Convert database row to Category domain model."""
    return Category(
        id=CategoryId(_as_uuid(row["id"])),
        name=row["name"],
        slug=Slug(row["slug"]),
    )


def category_to_dict(category: Category) -> Dict[str, Any]:
    """Convert Category domain model to database dict."""
    return category.model_dump()


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model."""
    return Tag(
        id=TagId(_as_uuid(row["id"])),
        name=row["name"],
        slug=Slug(row["slug"]),
    )


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    """Convert Tag domain model to database dict."""
    return tag.model_dump()


def row_to_post(
    row: Dict[str, Any],
    category_ids: Optional[list[UUID]] = None,
    tag_ids: Optional[list[UUID]] = None,
) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict
        category_ids: Linked category ids in stored order
        tag_ids: Linked tag ids in stored order

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_as_uuid(row["id"])),
        title=row["title"],
        slug=Slug(row["slug"]),
        content=row["content"],
        markdown=row["markdown"],
        author_id=UserId(_as_uuid(row["author_id"])),
        category_ids=[CategoryId(_as_uuid(c)) for c in category_ids or []],
        tag_ids=[TagId(_as_uuid(t)) for t in tag_ids or []],
        cover_image=BlobRef(row["cover_image"]) if row.get("cover_image") else None,
        is_premium=row["is_premium"],
        published=row["published"],
        post_type=row["post_type"],
        views=row["views"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Category and tag links live in their own tables and are excluded.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return post.model_dump(exclude={"category_ids", "tag_ids"})
