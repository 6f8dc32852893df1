"""Post domain service."""

from typing import Optional

import logfire

from quill.domain.error import ConflictError, NotFoundError
from quill.domain.model.post import Post
from quill.domain.repository import PostFilter, PostRepository
from quill.domain.value import Pagination, PostId, Slug

from .base import Service
from .slug import post_slug

DUPLICATE_TITLE_MESSAGE = "A post with this title already exists"


class PostService(Service):
    """Domain service for post operations."""

    def __init__(self, post_repository: PostRepository) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
        """
        self.post_repository = post_repository

    async def claim_slug(
        self, title: str, post_id: PostId, exclude_self: bool = False
    ) -> Slug:
        """Derive the slug for a title and make sure no other post has it.

        Collisions are reported, never disambiguated with a suffix.

        Args:
            title: Post title
            post_id: Post the slug is for
            exclude_self: Ignore the post's own current slug (updates)

        Returns:
            The slug

        Raises:
            ConflictError: If another post already uses the slug
        """
        with logfire.span("post_service.claim_slug", post_id=str(post_id), title=title):
            slug = post_slug(title, post_id)
            taken = await self.post_repository.slug_exists(
                slug, exclude_id=post_id if exclude_self else None
            )
            if taken:
                logfire.warn("Slug already taken", slug=str(slug))
                raise ConflictError(DUPLICATE_TITLE_MESSAGE)
            return slug

    async def create_post(self, post: Post) -> Post:
        """Persist a new post.

        Args:
            post: Post to create

        Returns:
            Stored post

        Raises:
            ConflictError: If the slug was claimed concurrently
        """
        with logfire.span(
            "post_service.create_post", post_id=str(post.id), title=post.title
        ):
            created = await self.post_repository.create(post)
            logfire.info(
                "Post created",
                post_id=str(created.id),
                slug=str(created.slug),
                published=created.published,
            )
            return created

    async def get_by_id(self, post_id: PostId) -> Post:
        """Get a post by ID.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.get_by_id", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))
            return post

    async def get_by_slug(self, slug: Slug) -> Post:
        """Get a post by slug.

        Raises:
            NotFoundError: If post not found
        """
        with logfire.span("post_service.get_by_slug", slug=str(slug)):
            post = await self.post_repository.find_by_slug(slug)
            if post is None:
                logfire.warn("Post not found by slug", slug=str(slug))
                raise NotFoundError("Post", str(slug))
            logfire.info("Post found by slug", slug=str(slug), post_id=str(post.id))
            return post

    async def list_posts(
        self, post_filter: PostFilter, pagination: Pagination
    ) -> tuple[list[Post], int]:
        """List posts newest first.

        Returns:
            Page of posts and total count matching the filter
        """
        with logfire.span(
            "post_service.list_posts",
            search=post_filter.search,
            published_only=post_filter.published_only,
            page=pagination.page,
            limit=pagination.limit,
        ):
            total = await self.post_repository.count(post_filter)
            posts = await self.post_repository.find_all(
                post_filter, limit=pagination.limit, offset=pagination.offset
            )
            logfire.info("Posts listed", count=len(posts), total=total)
            return posts, total

    async def update_post(self, post: Post) -> Post:
        """Store an updated post.

        Raises:
            NotFoundError: If the post was deleted meanwhile
            ConflictError: If the slug was claimed concurrently
        """
        with logfire.span("post_service.update_post", post_id=str(post.id)):
            updated = await self.post_repository.update(post)
            if updated is None:
                raise NotFoundError("Post", str(post.id))
            logfire.info("Post updated", post_id=str(post.id), slug=str(updated.slug))
            return updated

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        with logfire.span("post_service.delete_post", post_id=str(post_id)):
            deleted = await self.post_repository.delete(post_id)
            if not deleted:
                raise NotFoundError("Post", str(post_id))
            logfire.info("Post deleted", post_id=str(post_id))

    async def record_view(self, post: Post) -> Post:
        """Count one qualifying read of the post.

        The increment happens in the store, so concurrent readers never
        overwrite each other's count.

        Returns:
            The post carrying its new view count
        """
        with logfire.span("post_service.record_view", post_id=str(post.id)):
            views: Optional[int] = await self.post_repository.increment_views(post.id)
            if views is None:
                return post
            return post.model_copy(update={"views": views})
