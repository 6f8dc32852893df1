"""Shared post response models and population."""

from datetime import datetime
from typing import Optional

import logfire

from quill.application.usecase.base import CamelModel
from quill.config import UploadSettings
from quill.domain.error import ValidationError
from quill.domain.model import Category, PopulatedPost, Post, Tag, User
from quill.domain.repository import UserRepository
from quill.domain.service import BlobUpload, TaxonomyService
from quill.domain.value import UserId


class AuthorItem(CamelModel):
    """Public view of a post author."""

    id: str
    name: str
    email: str


class TaxonomyItem(CamelModel):
    """Category or tag as embedded in a post."""

    id: str
    name: str
    slug: str


class PostItem(CamelModel):
    """Post as returned by the API."""

    id: str
    title: str
    slug: str
    content: str
    markdown: str
    author: Optional[AuthorItem]
    categories: list[TaxonomyItem]
    tags: list[TaxonomyItem]
    cover_image: Optional[str]
    cover_image_url: Optional[str]
    is_premium: bool
    published: bool
    post_type: str
    views: int
    created_at: datetime
    updated_at: datetime


def _taxonomy_item(entity: Category | Tag) -> TaxonomyItem:
    return TaxonomyItem(id=str(entity.id), name=entity.name, slug=str(entity.slug))


def to_post_item(
    populated: PopulatedPost,
    upload_settings: UploadSettings,
    hide_body: bool = False,
) -> PostItem:
    """Build the API view of a populated post.

    With `hide_body`, content and markdown are sent empty; listings use it
    for premium posts the requester may not read.
    """
    post = populated.post
    author = populated.author
    cover_image = str(post.cover_image) if post.cover_image else None
    return PostItem(
        id=str(post.id),
        title=post.title,
        slug=str(post.slug),
        content="" if hide_body else post.content,
        markdown="" if hide_body else post.markdown,
        author=AuthorItem(id=str(author.id), name=author.name, email=author.email)
        if author
        else None,
        categories=[_taxonomy_item(c) for c in populated.categories],
        tags=[_taxonomy_item(t) for t in populated.tags],
        cover_image=cover_image,
        cover_image_url=f"{upload_settings.public_prefix}/{cover_image}"
        if cover_image
        else None,
        is_premium=post.is_premium,
        published=post.published,
        post_type=post.post_type,
        views=post.views,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


class PostPopulator:
    """Resolves author, categories and tags for posts in batched lookups."""

    def __init__(
        self, user_repository: UserRepository, taxonomy_service: TaxonomyService
    ) -> None:
        self.user_repository = user_repository
        self.taxonomy_service = taxonomy_service

    async def populate(self, posts: list[Post]) -> list[PopulatedPost]:
        """Populate many posts with one lookup per referenced kind.

        Args:
            posts: Posts to populate

        Returns:
            Populated posts, in input order
        """
        if not posts:
            return []

        with logfire.span("post_populator.populate", count=len(posts)):
            author_ids = list(dict.fromkeys(p.author_id for p in posts))
            authors: dict[UserId, User] = {
                u.id: u for u in await self.user_repository.find_by_ids(author_ids)
            }

            category_ids = list(dict.fromkeys(c for p in posts for c in p.category_ids))
            tag_ids = list(dict.fromkeys(t for p in posts for t in p.tag_ids))
            categories = {
                c.id: c
                for c in await self.taxonomy_service.resolve_categories(category_ids)
            }
            tags = {t.id: t for t in await self.taxonomy_service.resolve_tags(tag_ids)}

            return [
                PopulatedPost(
                    post=post,
                    author=authors.get(post.author_id),
                    categories=[
                        categories[c] for c in post.category_ids if c in categories
                    ],
                    tags=[tags[t] for t in post.tag_ids if t in tags],
                )
                for post in posts
            ]

    async def populate_one(self, post: Post) -> PopulatedPost:
        return (await self.populate([post]))[0]


def validate_cover_upload(
    upload: Optional[BlobUpload], upload_settings: UploadSettings
) -> None:
    """Check an uploaded cover image against the upload policy.

    Raises:
        ValidationError: If the file is empty, too large or not an allowed image type
    """
    if upload is None:
        return
    if not upload.data:
        raise ValidationError("Cover image is empty", fields=["coverImage"])
    if len(upload.data) > upload_settings.max_bytes:
        raise ValidationError(
            f"Cover image exceeds {upload_settings.max_bytes} bytes",
            fields=["coverImage"],
        )
    if upload.content_type not in upload_settings.allowed_types:
        raise ValidationError(
            "Cover image must be one of: " + ", ".join(upload_settings.allowed_types),
            fields=["coverImage"],
        )
