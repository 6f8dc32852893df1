"""PostgreSQL implementation of Category repository."""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.error import ConflictError
from quill.domain.model.taxonomy import Category
from quill.domain.repository.category import CategoryRepository
from quill.domain.value import CategoryId, Slug
from quill.persistence.mappers import category_to_dict, row_to_category
from quill.persistence.tables import categories_table


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL implementation of CategoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def save(self, category: Category) -> Category:
        """Save or update a category."""
        category_dict = category_to_dict(category)

        # Try to find existing category
        existing = await self.find_by_id(category.id)

        try:
            async with self.session.begin_nested():
                if existing:
                    stmt = (
                        update(categories_table)
                        .where(categories_table.c.id == category.id)
                        .values(**category_dict)
                    )
                else:
                    stmt = insert(categories_table).values(**category_dict)
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConflictError(f"Category '{category.name}' already exists") from e

        await self.session.flush()
        return category

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find category by ID."""
        stmt = select(categories_table).where(categories_table.c.id == category_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_by_ids(self, category_ids: list[CategoryId]) -> list[Category]:
        """Find multiple categories by ID in a single query."""
        if not category_ids:
            return []

        stmt = select(categories_table).where(categories_table.c.id.in_(category_ids))
        result = await self.session.execute(stmt)
        return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find category by slug."""
        stmt = select(categories_table).where(categories_table.c.slug == str(slug))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_by_name(self, name: str) -> Optional[Category]:
        """Find category by name."""
        stmt = select(categories_table).where(categories_table.c.name == name)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_all(self) -> list[Category]:
        """Find all categories ordered by name."""
        stmt = select(categories_table).order_by(categories_table.c.name)
        result = await self.session.execute(stmt)
        return [row_to_category(row._asdict()) for row in result.fetchall()]
