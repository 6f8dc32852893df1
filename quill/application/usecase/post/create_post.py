"""Create post use case."""

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

import logfire
from pydantic import BaseModel

from quill.application.usecase.post.common import (
    PostItem,
    PostPopulator,
    to_post_item,
    validate_cover_upload,
)
from quill.config import UploadSettings
from quill.domain.model.post import Post
from quill.domain.service import BlobStore, BlobUpload, PostService, TaxonomyService
from quill.domain.service.normalization import normalize_submission, require_fields
from quill.domain.value import BlobRef, CategoryId, PostId, Principal, TagId

PUBLISHED_MESSAGE = "Post published successfully"
DRAFT_MESSAGE = "Post saved as draft successfully"


class CreatePostRequest(BaseModel):
    """Create post request.

    `fields` holds the submitted form or JSON fields exactly as received.
    """

    principal: Principal
    fields: dict[str, Any]
    cover_upload: Optional[BlobUpload] = None


class CreatePostResponse(BaseModel):
    """Create post response."""

    message: str
    post: PostItem


class CreatePostUseCase:
    """Use case for creating a new post."""

    def __init__(
        self,
        post_service: PostService,
        taxonomy_service: TaxonomyService,
        post_populator: PostPopulator,
        blob_store: BlobStore,
        upload_settings: UploadSettings,
    ) -> None:
        """Initialize create post use case.

        Args:
            post_service: Post domain service
            taxonomy_service: Taxonomy domain service
            post_populator: Resolves author and taxonomy for responses
            blob_store: Store for cover images
            upload_settings: Cover image upload policy
        """
        self.post_service = post_service
        self.taxonomy_service = taxonomy_service
        self.post_populator = post_populator
        self.blob_store = blob_store
        self.upload_settings = upload_settings

    async def execute(self, request: CreatePostRequest) -> CreatePostResponse:
        """Execute create post flow.

        Steps:
        1. Normalize the submitted fields and check the required ones
        2. Drop category/tag ids that don't reference existing entities
        3. Derive the slug from the title and reject duplicates
        4. Store the cover image, if any, and persist the post

        Args:
            request: Create post request

        Returns:
            Created post, populated, with a publish/draft message

        Raises:
            ValidationError: If required fields are missing or the cover is rejected
            ConflictError: If another post already has the same slug
        """
        submission = normalize_submission(request.fields)

        with logfire.span(
            "create_post.execute",
            title=submission.title,
            author_id=str(request.principal.id),
            published=submission.published,
        ):
            require_fields(submission)
            validate_cover_upload(request.cover_upload, self.upload_settings)

            categories = await self.taxonomy_service.resolve_categories(
                submission.category_ids or []
            )
            tags = await self.taxonomy_service.resolve_tags(submission.tag_ids or [])

            title = (submission.title or "").strip()
            post_id = PostId(uuid4())
            slug = await self.post_service.claim_slug(title, post_id)

            cover_image: Optional[BlobRef] = None
            if request.cover_upload is not None:
                cover_image = await self.blob_store.store(request.cover_upload)

            now = datetime.now()
            post = Post(
                id=post_id,
                title=title,
                slug=slug,
                content=submission.content,
                markdown=submission.markdown,
                author_id=request.principal.id,
                category_ids=[CategoryId(c.id) for c in categories],
                tag_ids=[TagId(t.id) for t in tags],
                cover_image=cover_image,
                is_premium=bool(submission.is_premium),
                published=bool(submission.published),
                post_type=submission.post_type or "article",
                views=0,
                created_at=now,
                updated_at=now,
            )

            try:
                created = await self.post_service.create_post(post)
            except Exception:
                if cover_image is not None:
                    await self.blob_store.delete(cover_image)
                raise

            populated = await self.post_populator.populate_one(created)
            return CreatePostResponse(
                message=PUBLISHED_MESSAGE if created.published else DRAFT_MESSAGE,
                post=to_post_item(populated, self.upload_settings),
            )
