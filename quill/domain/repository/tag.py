"""Tag repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from quill.domain.model.taxonomy import Tag
from quill.domain.value import Slug, TagId


class TagRepository(ABC):
    """Repository interface for Tag reference data."""

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag.

        Raises:
            ConflictError: If the name or slug is already taken
        """
        pass

    @abstractmethod
    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        pass

    @abstractmethod
    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID in a single query.

        Returns:
            Found tags (may be fewer than requested if some don't exist)
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Tag]:
        """Find tag by slug."""
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Tag]:
        """Find tag by exact name."""
        pass

    @abstractmethod
    async def find_all(self) -> list[Tag]:
        """Find all tags, ordered by name."""
        pass
