"""In-memory implementation of Tag repository for testing."""

from typing import Optional

from quill.domain.error import ConflictError
from quill.domain.model.taxonomy import Tag
from quill.domain.repository.tag import TagRepository
from quill.domain.value import Slug, TagId


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing."""

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._tags: dict[TagId, Tag] = {}

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag, enforcing unique name and slug."""
        for other in self._tags.values():
            if other.id != tag.id and (
                other.name == tag.name or other.slug == tag.slug
            ):
                raise ConflictError(f"Tag '{tag.name}' already exists")
        self._tags[tag.id] = tag
        return tag

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        return self._tags.get(tag_id)

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID."""
        return [self._tags[i] for i in tag_ids if i in self._tags]

    async def find_by_slug(self, slug: Slug) -> Optional[Tag]:
        """Find tag by slug."""
        return next((c for c in self._tags.values() if c.slug == slug), None)

    async def find_by_name(self, name: str) -> Optional[Tag]:
        """Find tag by name."""
        return next((c for c in self._tags.values() if c.name == name), None)

    async def find_all(self) -> list[Tag]:
        """Find all tags ordered by name."""
        return sorted(self._tags.values(), key=lambda c: c.name)
