"""In-memory post repository for testing."""

from typing import Optional

from quill.domain.error import ConflictError
from quill.domain.model.post import Post
from quill.domain.repository.post import PostFilter, PostRepository
from quill.domain.value import PostId, Slug

DUPLICATE_SLUG_MESSAGE = "A post with this title already exists"


def _matches(post: Post, post_filter: PostFilter) -> bool:
    if post_filter.published_only and not post.published:
        return False
    if post_filter.category_id is not None and (
        post_filter.category_id not in post.category_ids
    ):
        return False
    if post_filter.tag_id is not None and post_filter.tag_id not in post.tag_ids:
        return False
    if post_filter.search:
        term = post_filter.search.lower()
        if term not in post.title.lower() and term not in post.content.lower():
            return False
    return True


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    def _slug_owner(self, slug: Slug) -> Optional[PostId]:
        for post in self._posts.values():
            if post.slug == slug:
                return post.id
        return None

    async def create(self, post: Post) -> Post:
        """Insert a new post, enforcing slug uniqueness."""
        if self._slug_owner(post.slug) is not None:
            raise ConflictError(DUPLICATE_SLUG_MESSAGE)
        self._posts[post.id] = post
        return post

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Post]:
        """Find a post by slug."""
        post_id = self._slug_owner(slug)
        return self._posts.get(post_id) if post_id else None

    async def slug_exists(
        self, slug: Slug, exclude_id: Optional[PostId] = None
    ) -> bool:
        """Check if a slug is used by any post other than `exclude_id`."""
        owner = self._slug_owner(slug)
        return owner is not None and owner != exclude_id

    async def find_all(
        self,
        post_filter: PostFilter,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination, newest first."""
        posts = [p for p in self._posts.values() if _matches(p, post_filter)]
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts[offset : offset + limit]

    async def count(self, post_filter: PostFilter) -> int:
        """Count posts matching the given filters."""
        return sum(1 for p in self._posts.values() if _matches(p, post_filter))

    async def update(self, post: Post) -> Optional[Post]:
        """Replace a stored post, keeping its view counter."""
        current = self._posts.get(post.id)
        if current is None:
            return None
        owner = self._slug_owner(post.slug)
        if owner is not None and owner != post.id:
            raise ConflictError(DUPLICATE_SLUG_MESSAGE)
        updated = post.model_copy(update={"views": current.views})
        self._posts[post.id] = updated
        return updated

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post."""
        return self._posts.pop(post_id, None) is not None

    async def increment_views(self, post_id: PostId) -> Optional[int]:
        """Increment views by 1."""
        post = self._posts.get(post_id)
        if post is None:
            return None
        # Views don't touch updated_at
        self._posts[post_id] = post.model_copy(update={"views": post.views + 1})
        return post.views + 1
