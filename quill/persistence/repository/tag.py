"""PostgreSQL implementation of Tag repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.error import ConflictError
from quill.domain.model.taxonomy import Tag
from quill.domain.repository.tag import TagRepository
from quill.domain.value import Slug, TagId
from quill.persistence.mappers import tag_to_dict, row_to_tag
from quill.persistence.tables import tags_table


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def save(self, tag: Tag) -> Tag:
        """Save or update a tag."""
        tag_dict = tag_to_dict(tag)

        # Try to find existing tag
        existing = await self.find_by_id(tag.id)

        try:
            async with self.session.begin_nested():
                if existing:
                    stmt = (
                        update(tags_table)
                        .where(tags_table.c.id == tag.id)
                        .values(**tag_dict)
                    )
                else:
                    stmt = insert(tags_table).values(**tag_dict)
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConflictError(f"Tag '{tag.name}' already exists") from e

        await self.session.flush()
        return tag

    async def find_by_id(self, tag_id: TagId) -> Optional[Tag]:
        """Find tag by ID."""
        stmt = select(tags_table).where(tags_table.c.id == tag_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_by_ids(self, tag_ids: list[TagId]) -> list[Tag]:
        """Find multiple tags by ID in a single query."""
        if not tag_ids:
            return []

        stmt = select(tags_table).where(tags_table.c.id.in_(tag_ids))
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]

    async def find_by_slug(self, slug: Slug) -> Optional[Tag]:
        """Find tag by slug."""
        stmt = select(tags_table).where(tags_table.c.slug == str(slug))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_by_name(self, name: str) -> Optional[Tag]:
        """Find tag by name."""
        stmt = select(tags_table).where(tags_table.c.name == name)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_all(self) -> list[Tag]:
        """Find all tags ordered by name."""
        stmt = select(tags_table).order_by(tags_table.c.name)
        result = await self.session.execute(stmt)
        return [row_to_tag(row._asdict()) for row in result.fetchall()]
