"""Test configuration and fixtures."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire

from quill.domain.model import Category, Post, Tag, User
from quill.domain.repository import (
    CategoryRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from quill.domain.service.slug import post_slug, slugify
from quill.domain.value import (
    CategoryId,
    PostId,
    Principal,
    Role,
    Slug,
    TagId,
    UserId,
)

# Spans and logs stay local during tests
logfire.configure(send_to_logfire=False, console=False)


def principal_for(user: User) -> Principal:
    """Principal as the identity service would build it for `user`."""
    return Principal(id=user.id, role=user.role, is_premium=user.is_premium)


async def make_user(
    user_repo: UserRepository,
    name: str = "Alice",
    role: Role = Role.USER,
    is_premium: bool = False,
) -> User:
    """Store a user with a unique email and username."""
    suffix = uuid4().hex[:8]
    user = User(
        id=UserId(uuid4()),
        name=name,
        email=f"{name.lower()}-{suffix}@example.com",
        username=f"{name.lower()}{suffix}",
        password_hash="not-a-real-hash",
        role=role,
        is_premium=is_premium,
    )
    return await user_repo.save(user)


async def make_category(category_repo: CategoryRepository, name: str) -> Category:
    return await category_repo.save(
        Category(id=CategoryId(uuid4()), name=name, slug=Slug(slugify(name)))
    )


async def make_tag(tag_repo: TagRepository, name: str) -> Tag:
    return await tag_repo.save(
        Tag(id=TagId(uuid4()), name=name, slug=Slug(slugify(name)))
    )


async def make_post(
    post_repo: PostRepository,
    author: User,
    title: str = "Test Post",
    published: bool = True,
    is_premium: bool = False,
    views: int = 0,
    created_at: Optional[datetime] = None,
    category_ids: Optional[list[CategoryId]] = None,
    tag_ids: Optional[list[TagId]] = None,
) -> Post:
    """Store a post straight through the repository."""
    post_id = PostId(uuid4())
    created_at = created_at or datetime.now()
    post = Post(
        id=post_id,
        title=title,
        slug=post_slug(title, post_id),
        content=f"<p>{title}</p>",
        markdown=f"# {title}",
        author_id=author.id,
        category_ids=category_ids or [],
        tag_ids=tag_ids or [],
        is_premium=is_premium,
        published=published,
        views=views,
        created_at=created_at,
        updated_at=created_at,
    )
    return await post_repo.create(post)
