"""Integration tests for PostgresPostRepository.

Requires a migrated Postgres at DATABASE__URL; run with `pytest -m integration`.
"""

from uuid import uuid4

import pytest

from quill.domain.error import ConflictError
from quill.domain.repository import (
    CategoryRepository,
    PostFilter,
    PostRepository,
    TagRepository,
    UserRepository,
)
from tests.conftest import make_category, make_post, make_tag, make_user
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture: real persistence
integration_env = create_env_fixture(unmock={"persistence"})


def _unique(name: str) -> str:
    return f"{name} {uuid4().hex[:8]}"


class TestPostgresPostRepository:
    @pytest.mark.asyncio
    async def test_create_and_find_keeps_taxonomy_order(self, integration_env):
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        user_repo = await integration_env.get(UserRepository)
        category_repo = await integration_env.get(CategoryRepository)
        tag_repo = await integration_env.get(TagRepository)
        author = await make_user(user_repo)
        first = await make_category(category_repo, _unique("Zebra"))
        second = await make_category(category_repo, _unique("Apple"))
        tag = await make_tag(tag_repo, _unique("Python"))

        # Act
        post = await make_post(
            post_repo,
            author,
            title=_unique("Ordered"),
            category_ids=[first.id, second.id],
            tag_ids=[tag.id],
        )
        found = await post_repo.find_by_slug(post.slug)

        # Assert
        assert found is not None
        assert found.category_ids == [first.id, second.id]
        assert found.tag_ids == [tag.id]

    @pytest.mark.asyncio
    async def test_duplicate_slug_raises_conflict(self, integration_env):
        post_repo = await integration_env.get(PostRepository)
        user_repo = await integration_env.get(UserRepository)
        author = await make_user(user_repo)
        title = _unique("Twice")
        await make_post(post_repo, author, title=title)

        with pytest.raises(ConflictError):
            await make_post(post_repo, author, title=title)

        # The session is still usable after the failed insert
        after = await make_post(post_repo, author, title=_unique("After"))
        assert await post_repo.slug_exists(after.slug)

    @pytest.mark.asyncio
    async def test_increment_views_is_atomic_in_store(self, integration_env):
        post_repo = await integration_env.get(PostRepository)
        user_repo = await integration_env.get(UserRepository)
        author = await make_user(user_repo)
        post = await make_post(post_repo, author, title=_unique("Viewed"), views=5)

        assert await post_repo.increment_views(post.id) == 6
        assert await post_repo.increment_views(post.id) == 7
        assert await post_repo.increment_views(uuid4()) is None

    @pytest.mark.asyncio
    async def test_filter_by_category_and_search(self, integration_env):
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        user_repo = await integration_env.get(UserRepository)
        category_repo = await integration_env.get(CategoryRepository)
        author = await make_user(user_repo)
        category = await make_category(category_repo, _unique("Travel"))
        marker = uuid4().hex[:12]
        await make_post(
            post_repo, author, title=f"Trip {marker}", category_ids=[category.id]
        )
        await make_post(post_repo, author, title=f"Draft {marker}", published=False)

        # Act
        by_category = await post_repo.find_all(PostFilter(category_id=category.id))
        by_search = await post_repo.count(
            PostFilter(search=marker.upper(), published_only=False)
        )

        # Assert
        assert [p.title for p in by_category] == [f"Trip {marker}"]
        assert by_search == 2
