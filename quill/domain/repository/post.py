"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

from quill.domain.model.post import Post
from quill.domain.value import CategoryId, PostId, Slug, TagId


class PostFilter(BaseModel):
    """Filters for post listings.

    Results are always sorted newest first by creation time.
    """

    category_id: Optional[CategoryId] = None
    tag_id: Optional[TagId] = None
    search: Optional[str] = None  # Case-insensitive substring of title or content
    published_only: bool = True


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def create(self, post: Post) -> Post:
        """Insert a new post.

        Args:
            post: The post to insert

        Returns:
            The stored post

        Raises:
            ConflictError: If another post already has the same slug
        """
        pass

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug.

        Args:
            slug: The post's slug

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def slug_exists(
        self, slug: Slug, exclude_id: Optional[PostId] = None
    ) -> bool:
        """Check whether a slug is already used.

        Args:
            slug: Slug to check
            exclude_id: Post to ignore (the post being updated)

        Returns:
            True if another post owns the slug
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        post_filter: PostFilter,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination, newest first.

        Args:
            post_filter: Filters to apply
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def count(self, post_filter: PostFilter) -> int:
        """Count posts matching the given filters.

        Args:
            post_filter: Filters to apply

        Returns:
            Total number of posts matching the criteria
        """
        pass

    @abstractmethod
    async def update(self, post: Post) -> Optional[Post]:
        """Replace a stored post.

        Args:
            post: The post with updated fields

        Returns:
            The stored post, or None if it no longer exists

        Raises:
            ConflictError: If the new slug belongs to another post
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post (hard delete).

        Args:
            post_id: The post ID to delete

        Returns:
            True if a post was deleted
        """
        pass

    @abstractmethod
    async def increment_views(self, post_id: PostId) -> Optional[int]:
        """Atomically increment the view counter by 1.

        Args:
            post_id: The post ID

        Returns:
            The new view count, or None if the post doesn't exist
        """
        pass
