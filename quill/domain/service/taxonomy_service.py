"""Taxonomy domain service: categories and tags."""

from typing import Optional
from uuid import UUID, uuid4

import logfire

from quill.domain.error import ConflictError, ValidationError
from quill.domain.model.taxonomy import Category, Tag
from quill.domain.repository import CategoryRepository, TagRepository
from quill.domain.value import CategoryId, Slug, TagId

from .base import Service
from .slug import slugify


class TaxonomyService(Service):
    """Domain service for category and tag reference data."""

    def __init__(
        self,
        category_repository: CategoryRepository,
        tag_repository: TagRepository,
    ) -> None:
        """Initialize taxonomy service.

        Args:
            category_repository: Category repository
            tag_repository: Tag repository
        """
        self.category_repository = category_repository
        self.tag_repository = tag_repository

    async def resolve_categories(self, ids: list[UUID]) -> list[Category]:
        """Resolve category ids, dropping the ones that don't exist.

        Args:
            ids: Candidate category ids

        Returns:
            Existing categories in the order requested
        """
        if not ids:
            return []
        with logfire.span("taxonomy_service.resolve_categories", count=len(ids)):
            found = await self.category_repository.find_by_ids(
                [CategoryId(i) for i in ids]
            )
            by_id = {category.id: category for category in found}
            resolved = [by_id[i] for i in ids if i in by_id]
            if len(resolved) < len(ids):
                logfire.info(
                    "Dropped unknown category references",
                    requested=len(ids),
                    resolved=len(resolved),
                )
            return resolved

    async def resolve_tags(self, ids: list[UUID]) -> list[Tag]:
        """Resolve tag ids, dropping the ones that don't exist.

        Args:
            ids: Candidate tag ids

        Returns:
            Existing tags in the order requested
        """
        if not ids:
            return []
        with logfire.span("taxonomy_service.resolve_tags", count=len(ids)):
            found = await self.tag_repository.find_by_ids([TagId(i) for i in ids])
            by_id = {tag.id: tag for tag in found}
            resolved = [by_id[i] for i in ids if i in by_id]
            if len(resolved) < len(ids):
                logfire.info(
                    "Dropped unknown tag references",
                    requested=len(ids),
                    resolved=len(resolved),
                )
            return resolved

    async def find_category(self, ref: str) -> Optional[Category]:
        """Find a category by id or slug."""
        category_id = _parse_uuid(ref)
        if category_id is not None:
            return await self.category_repository.find_by_id(CategoryId(category_id))
        slug = slugify(ref)
        if not slug:
            return None
        return await self.category_repository.find_by_slug(Slug(slug))

    async def find_tag(self, ref: str) -> Optional[Tag]:
        """Find a tag by id or slug."""
        tag_id = _parse_uuid(ref)
        if tag_id is not None:
            return await self.tag_repository.find_by_id(TagId(tag_id))
        slug = slugify(ref)
        if not slug:
            return None
        return await self.tag_repository.find_by_slug(Slug(slug))

    async def list_categories(self) -> list[Category]:
        """All categories ordered by name."""
        with logfire.span("taxonomy_service.list_categories"):
            categories = await self.category_repository.find_all()
            logfire.info("Categories retrieved", count=len(categories))
            return categories

    async def list_tags(self) -> list[Tag]:
        """All tags ordered by name."""
        with logfire.span("taxonomy_service.list_tags"):
            tags = await self.tag_repository.find_all()
            logfire.info("Tags retrieved", count=len(tags))
            return tags

    async def create_category(self, name: str) -> Category:
        """Create a category whose slug derives from its name.

        Raises:
            ValidationError: If the name is blank or unsluggable
            ConflictError: If the name or slug is taken
        """
        name, slug = _name_and_slug(name, "Category")
        with logfire.span("taxonomy_service.create_category", name=name):
            if await self.category_repository.find_by_name(name) or (
                await self.category_repository.find_by_slug(slug)
            ):
                raise ConflictError(f"Category '{name}' already exists")
            category = await self.category_repository.save(
                Category(id=CategoryId(uuid4()), name=name, slug=slug)
            )
            logfire.info("Category created", category_id=str(category.id), name=name)
            return category

    async def create_tag(self, name: str) -> Tag:
        """Create a tag whose slug derives from its name.

        Raises:
            ValidationError: If the name is blank or unsluggable
            ConflictError: If the name or slug is taken
        """
        name, slug = _name_and_slug(name, "Tag")
        with logfire.span("taxonomy_service.create_tag", name=name):
            if await self.tag_repository.find_by_name(name) or (
                await self.tag_repository.find_by_slug(slug)
            ):
                raise ConflictError(f"Tag '{name}' already exists")
            tag = await self.tag_repository.save(
                Tag(id=TagId(uuid4()), name=name, slug=slug)
            )
            logfire.info("Tag created", tag_id=str(tag.id), name=name)
            return tag

    async def upsert_category(self, name: str, slug: str) -> Category:
        """Create or rename the category with the given slug (seeding)."""
        existing = await self.category_repository.find_by_slug(Slug(slug))
        category = Category(
            id=existing.id if existing else CategoryId(uuid4()),
            name=name,
            slug=Slug(slug),
        )
        return await self.category_repository.save(category)

    async def upsert_tag(self, name: str, slug: str) -> Tag:
        """Create or rename the tag with the given slug (seeding)."""
        existing = await self.tag_repository.find_by_slug(Slug(slug))
        tag = Tag(
            id=existing.id if existing else TagId(uuid4()),
            name=name,
            slug=Slug(slug),
        )
        return await self.tag_repository.save(tag)


def _parse_uuid(ref: str) -> Optional[UUID]:
    try:
        return UUID(ref.strip())
    except ValueError:
        return None


def _name_and_slug(raw_name: str, kind: str) -> tuple[str, Slug]:
    name = (raw_name or "").strip()
    if not name:
        raise ValidationError(f"{kind} name is required", fields=["name"])
    slug = slugify(name)
    if not slug:
        raise ValidationError(
            f"{kind} name must contain letters or digits", fields=["name"]
        )
    return name, Slug(slug)
