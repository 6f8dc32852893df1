"""Unit tests for TaxonomyService."""

from uuid import uuid4

import pytest

from quill.domain.error import ConflictError, ValidationError
from quill.domain.repository import CategoryRepository, TagRepository
from quill.domain.service import TaxonomyService
from tests.conftest import make_category, make_tag
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestResolve:
    """Tests for resolving submitted references."""

    @pytest.mark.asyncio
    async def test_resolve_categories_drops_unknown_ids(self, unit_env):
        # Arrange
        taxonomy_service = await unit_env.get(TaxonomyService)
        category_repo = await unit_env.get(CategoryRepository)
        finance = await make_category(category_repo, "Finance & Investing")
        travel = await make_category(category_repo, "Travel")

        # Act
        resolved = await taxonomy_service.resolve_categories(
            [travel.id, uuid4(), finance.id]
        )

        # Assert
        assert [c.name for c in resolved] == ["Travel", "Finance & Investing"]

    @pytest.mark.asyncio
    async def test_resolve_tags_empty(self, unit_env):
        taxonomy_service = await unit_env.get(TaxonomyService)

        assert await taxonomy_service.resolve_tags([]) == []


class TestFind:
    """Tests for finding a category or tag by id or slug."""

    @pytest.mark.asyncio
    async def test_find_category_by_slug(self, unit_env):
        taxonomy_service = await unit_env.get(TaxonomyService)
        category_repo = await unit_env.get(CategoryRepository)
        category = await make_category(category_repo, "Finance & Investing")

        found = await taxonomy_service.find_category("finance-investing")

        assert found.id == category.id

    @pytest.mark.asyncio
    async def test_find_tag_by_id(self, unit_env):
        taxonomy_service = await unit_env.get(TaxonomyService)
        tag_repo = await unit_env.get(TagRepository)
        tag = await make_tag(tag_repo, "Python")

        found = await taxonomy_service.find_tag(str(tag.id))

        assert found.id == tag.id

    @pytest.mark.asyncio
    async def test_find_unknown_returns_none(self, unit_env):
        taxonomy_service = await unit_env.get(TaxonomyService)

        assert await taxonomy_service.find_tag("nothing-here") is None
        assert await taxonomy_service.find_category(str(uuid4())) is None


class TestCreate:
    """Tests for creating categories and tags."""

    @pytest.mark.asyncio
    async def test_create_category_derives_slug(self, unit_env):
        taxonomy_service = await unit_env.get(TaxonomyService)

        category = await taxonomy_service.create_category("  Mental Health ")

        assert category.name == "Mental Health"
        assert str(category.slug) == "mental-health"

    @pytest.mark.asyncio
    async def test_create_category_rejects_duplicate_name(self, unit_env):
        taxonomy_service = await unit_env.get(TaxonomyService)
        await taxonomy_service.create_category("Travel")

        with pytest.raises(ConflictError):
            await taxonomy_service.create_category("Travel")

    @pytest.mark.asyncio
    async def test_create_tag_rejects_same_slug(self, unit_env):
        """Names differing only in punctuation share a slug and collide."""
        taxonomy_service = await unit_env.get(TaxonomyService)
        await taxonomy_service.create_tag("Node js")

        with pytest.raises(ConflictError):
            await taxonomy_service.create_tag("Node-js")

    @pytest.mark.asyncio
    async def test_create_tag_requires_name(self, unit_env):
        taxonomy_service = await unit_env.get(TaxonomyService)

        with pytest.raises(ValidationError):
            await taxonomy_service.create_tag("   ")


class TestUpsert:
    @pytest.mark.asyncio
    async def test_upsert_category_renames_in_place(self, unit_env):
        # Arrange
        taxonomy_service = await unit_env.get(TaxonomyService)
        category_repo = await unit_env.get(CategoryRepository)
        first = await taxonomy_service.upsert_category("UI UX", "ui-ux-design")

        # Act
        second = await taxonomy_service.upsert_category("UI/UX Design", "ui-ux-design")

        # Assert
        assert second.id == first.id
        categories = await category_repo.find_all()
        assert [c.name for c in categories] == ["UI/UX Design"]
