"""In-memory implementation of Category repository for testing."""

from typing import Optional

from quill.domain.error import ConflictError
from quill.domain.model.taxonomy import Category
from quill.domain.repository.category import CategoryRepository
from quill.domain.value import CategoryId, Slug


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of CategoryRepository for testing."""

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._categories: dict[CategoryId, Category] = {}

    async def save(self, category: Category) -> Category:
        """Save or update a category, enforcing unique name and slug."""
        for other in self._categories.values():
            if other.id != category.id and (
                other.name == category.name or other.slug == category.slug
            ):
                raise ConflictError(f"Category '{category.name}' already exists")
        self._categories[category.id] = category
        return category

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID."""
        return self._categories.get(category_id)

    async def find_by_ids(self, category_ids: list[CategoryId]) -> list[Category]:
        """Find multiple categories by ID."""
        return [self._categories[i] for i in category_ids if i in self._categories]

    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find category by slug."""
        return next((c for c in self._categories.values() if c.slug == slug), None)

    async def find_by_name(self, name: str) -> Optional[Category]:
        """Find category by name."""
        return next((c for c in self._categories.values() if c.name == name), None)

    async def find_all(self) -> list[Category]:
        """Find all categories ordered by name."""
        return sorted(self._categories.values(), key=lambda c: c.name)
