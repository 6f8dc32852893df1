"""PostgreSQL implementation of Post repository."""

from collections import defaultdict
from typing import Any, List, Optional
from uuid import UUID

import logfire
from sqlalchemy import Select, delete, desc, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.error import ConflictError
from quill.domain.model import Post
from quill.domain.repository.post import PostFilter, PostRepository
from quill.domain.value import PostId, Slug
from quill.persistence.mappers import post_to_dict, row_to_post
from quill.persistence.tables import (
    post_categories_table,
    post_tags_table,
    posts_table,
)

DUPLICATE_SLUG_MESSAGE = "A post with this title already exists"


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so search terms match literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _apply_filter(stmt: Select[Any], post_filter: PostFilter) -> Select[Any]:
    """Apply listing filters to a select over the posts table."""
    if post_filter.published_only:
        stmt = stmt.where(posts_table.c.published.is_(True))

    # Subqueries rather than joins so a post never appears twice
    if post_filter.category_id is not None:
        stmt = stmt.where(
            posts_table.c.id.in_(
                select(post_categories_table.c.post_id).where(
                    post_categories_table.c.category_id == post_filter.category_id
                )
            )
        )
    if post_filter.tag_id is not None:
        stmt = stmt.where(
            posts_table.c.id.in_(
                select(post_tags_table.c.post_id).where(
                    post_tags_table.c.tag_id == post_filter.tag_id
                )
            )
        )

    if post_filter.search:
        pattern = f"%{_escape_like(post_filter.search)}%"
        stmt = stmt.where(
            or_(
                posts_table.c.title.ilike(pattern, escape="\\"),
                posts_table.c.content.ilike(pattern, escape="\\"),
            )
        )
    return stmt


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_links(
        self, post_ids: list[UUID]
    ) -> tuple[dict[UUID, list[UUID]], dict[UUID, list[UUID]]]:
        """Fetch category and tag links for multiple posts.

        Args:
            post_ids: List of post IDs

        Returns:
            Two dicts mapping post_id -> ordered category ids / tag ids
        """
        if not post_ids:
            return {}, {}

        category_stmt = (
            select(post_categories_table.c.post_id, post_categories_table.c.category_id)
            .where(post_categories_table.c.post_id.in_(post_ids))
            .order_by(post_categories_table.c.position)
        )
        tag_stmt = (
            select(post_tags_table.c.post_id, post_tags_table.c.tag_id)
            .where(post_tags_table.c.post_id.in_(post_ids))
            .order_by(post_tags_table.c.position)
        )

        category_map: dict[UUID, list[UUID]] = defaultdict(list)
        for row in (await self.session.execute(category_stmt)).fetchall():
            category_map[row.post_id].append(row.category_id)

        tag_map: dict[UUID, list[UUID]] = defaultdict(list)
        for row in (await self.session.execute(tag_stmt)).fetchall():
            tag_map[row.post_id].append(row.tag_id)

        return category_map, tag_map

    async def _to_posts(self, rows: list[Any]) -> List[Post]:
        category_map, tag_map = await self._fetch_links([row.id for row in rows])
        return [
            row_to_post(
                row._asdict(),
                category_ids=category_map.get(row.id, []),
                tag_ids=tag_map.get(row.id, []),
            )
            for row in rows
        ]

    async def _replace_links(self, post: Post) -> None:
        await self.session.execute(
            delete(post_categories_table).where(
                post_categories_table.c.post_id == post.id
            )
        )
        await self.session.execute(
            delete(post_tags_table).where(post_tags_table.c.post_id == post.id)
        )
        if post.category_ids:
            await self.session.execute(
                insert(post_categories_table),
                [
                    {"post_id": post.id, "category_id": category_id, "position": i}
                    for i, category_id in enumerate(post.category_ids)
                ],
            )
        if post.tag_ids:
            await self.session.execute(
                insert(post_tags_table),
                [
                    {"post_id": post.id, "tag_id": tag_id, "position": i}
                    for i, tag_id in enumerate(post.tag_ids)
                ],
            )

    async def create(self, post: Post) -> Post:
        """Insert a new post with its category and tag links."""
        with logfire.span(
            "post_repository.create", post_id=str(post.id), slug=str(post.slug)
        ):
            try:
                # Savepoint so a unique violation leaves the session usable
                async with self.session.begin_nested():
                    await self.session.execute(
                        insert(posts_table).values(**post_to_dict(post))
                    )
                    await self._replace_links(post)
            except IntegrityError as e:
                logfire.warn("Slug conflict on insert", slug=str(post.slug))
                raise ConflictError(DUPLICATE_SLUG_MESSAGE) from e

            await self.session.flush()
            logfire.info("Post inserted", post_id=str(post.id))
            return post

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(posts_table).where(posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            return (await self._to_posts([row]))[0]

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        with logfire.span("post_repository.find_by_slug", slug=str(slug)):
            stmt = select(posts_table).where(posts_table.c.slug == str(slug))
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found by slug", slug=str(slug))
                return None

            return (await self._to_posts([row]))[0]

    async def slug_exists(
        self, slug: Slug, exclude_id: Optional[PostId] = None
    ) -> bool:
        """Check if a slug is used by any post other than `exclude_id`."""
        with logfire.span("post_repository.slug_exists", slug=str(slug)):
            stmt = (
                select(func.count())
                .select_from(posts_table)
                .where(posts_table.c.slug == str(slug))
            )
            if exclude_id is not None:
                stmt = stmt.where(posts_table.c.id != exclude_id)
            result = await self.session.execute(stmt)
            exists = (result.scalar() or 0) > 0

            logfire.debug("Slug existence check", slug=str(slug), exists=exists)
            return exists

    async def find_all(
        self,
        post_filter: PostFilter,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination, newest first."""
        with logfire.span(
            "post_repository.find_all",
            category_id=(
                str(post_filter.category_id) if post_filter.category_id else None
            ),
            tag_id=str(post_filter.tag_id) if post_filter.tag_id else None,
            search=post_filter.search,
            published_only=post_filter.published_only,
            limit=limit,
            offset=offset,
        ):
            stmt = _apply_filter(select(posts_table), post_filter)
            stmt = (
                stmt.order_by(desc(posts_table.c.created_at), desc(posts_table.c.id))
                .limit(limit)
                .offset(offset)
            )

            result = await self.session.execute(stmt)
            post_rows = result.fetchall()

            if not post_rows:
                logfire.info("No posts found")
                return []

            posts = await self._to_posts(post_rows)
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(self, post_filter: PostFilter) -> int:
        """Count posts matching the given filters."""
        with logfire.span(
            "post_repository.count",
            search=post_filter.search,
            published_only=post_filter.published_only,
        ):
            stmt = _apply_filter(
                select(func.count()).select_from(posts_table), post_filter
            )
            result = await self.session.execute(stmt)
            count = result.scalar() or 0
            logfire.info("Post count", count=count)
            return count

    async def update(self, post: Post) -> Optional[Post]:
        """Replace a stored post and its links."""
        with logfire.span(
            "post_repository.update", post_id=str(post.id), slug=str(post.slug)
        ):
            values = post_to_dict(post)
            # The counter is only ever changed by increment_views
            values.pop("views")
            values.pop("id")
            values.pop("created_at")

            try:
                async with self.session.begin_nested():
                    stmt = (
                        update(posts_table)
                        .where(posts_table.c.id == post.id)
                        .values(**values)
                        .returning(posts_table)
                    )
                    row = (await self.session.execute(stmt)).fetchone()
                    if row is None:
                        logfire.warn("Post not found for update", post_id=str(post.id))
                        return None
                    await self._replace_links(post)
            except IntegrityError as e:
                logfire.warn("Slug conflict on update", slug=str(post.slug))
                raise ConflictError(DUPLICATE_SLUG_MESSAGE) from e

            await self.session.flush()
            return row_to_post(
                row._asdict(), category_ids=post.category_ids, tag_ids=post.tag_ids
            )

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete). Links cascade."""
        with logfire.span("post_repository.delete", post_id=str(post_id)):
            stmt = (
                delete(posts_table)
                .where(posts_table.c.id == post_id)
                .returning(posts_table.c.id)
            )
            result = await self.session.execute(stmt)
            deleted = result.fetchone() is not None
            await self.session.flush()
            return deleted

    async def increment_views(self, post_id: PostId) -> Optional[int]:
        """Atomically increment views by 1."""
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post_id)
            .values(views=posts_table.c.views + 1)
            .returning(posts_table.c.views)
        )
        result = await self.session.execute(stmt)
        views = result.scalar()
        await self.session.flush()
        return views
