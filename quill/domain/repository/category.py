"""Category repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from quill.domain.model.taxonomy import Category
from quill.domain.value import CategoryId, Slug


class CategoryRepository(ABC):
    """Repository interface for Category reference data."""

    @abstractmethod
    async def save(self, category: Category) -> Category:
        """Save or update a category.

        Raises:
            ConflictError: If the name or slug is already taken
        """
        pass

    @abstractmethod
    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID."""
        pass

    @abstractmethod
    async def find_by_ids(self, category_ids: list[CategoryId]) -> list[Category]:
        """Find multiple categories by ID in a single query.

        Returns:
            Found categories (may be fewer than requested if some don't exist)
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find category by slug."""
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Category]:
        """Find category by exact name."""
        pass

    @abstractmethod
    async def find_all(self) -> list[Category]:
        """Find all categories, ordered by name."""
        pass
