"""Update post use case."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

import logfire
from pydantic import BaseModel, ValidationError as PydanticValidationError

from quill.application.usecase.post.common import (
    PostItem,
    PostPopulator,
    to_post_item,
    validate_cover_upload,
)
from quill.config import UploadSettings
from quill.domain.error import NotFoundError, ValidationError
from quill.domain.repository import AfterCommit
from quill.domain.service import (
    AccessGate,
    BlobStore,
    BlobUpload,
    PostService,
    TaxonomyService,
)
from quill.domain.service.normalization import (
    normalize_submission,
    reject_blank_updates,
)
from quill.domain.value import BlobRef, CategoryId, PostId, Principal, TagId

UPDATED_MESSAGE = "Post updated successfully"


def parse_post_id(raw: str) -> PostId:
    """Parse a path post id; malformed ids are reported as not found.

    Raises:
        NotFoundError: If the id is not a UUID
    """
    try:
        return PostId(UUID(raw))
    except ValueError:
        raise NotFoundError("Post", raw)


class UpdatePostRequest(BaseModel):
    """Update post request.

    Only fields present in `fields` are changed.
    """

    post_id: str
    principal: Principal
    fields: dict[str, Any]
    cover_upload: Optional[BlobUpload] = None


class UpdatePostResponse(BaseModel):
    """Update post response."""

    message: str
    post: PostItem


class UpdatePostUseCase:
    """Use case for partially updating a post."""

    def __init__(
        self,
        post_service: PostService,
        taxonomy_service: TaxonomyService,
        access_gate: AccessGate,
        post_populator: PostPopulator,
        blob_store: BlobStore,
        upload_settings: UploadSettings,
        after_commit: AfterCommit,
    ) -> None:
        """Initialize update post use case.

        Args:
            post_service: Post domain service
            taxonomy_service: Taxonomy domain service
            access_gate: Authorization rules
            post_populator: Resolves author and taxonomy for responses
            blob_store: Store for cover images
            upload_settings: Cover image upload policy
            after_commit: Defers removing a replaced cover until the commit
        """
        self.post_service = post_service
        self.taxonomy_service = taxonomy_service
        self.access_gate = access_gate
        self.post_populator = post_populator
        self.blob_store = blob_store
        self.upload_settings = upload_settings
        self.after_commit = after_commit

    async def execute(self, request: UpdatePostRequest) -> UpdatePostResponse:
        """Execute update post flow.

        Steps:
        1. Load the post and check the requester is its author or an admin
        2. Normalize the supplied fields; blanking a required field is rejected
        3. Recompute the slug when the title changes
        4. Store a replacement cover image, if uploaded, and persist

        Args:
            request: Update post request

        Returns:
            Updated post, populated

        Raises:
            NotFoundError: If the post doesn't exist or the requester is
                neither its author nor an admin
            ValidationError: If a required field is blanked or the cover is rejected
            ConflictError: If the new title's slug belongs to another post
        """
        post_id = parse_post_id(request.post_id)

        with logfire.span(
            "update_post.execute",
            post_id=str(post_id),
            user_id=str(request.principal.id),
            fields=sorted(request.fields),
        ):
            post = await self.post_service.get_by_id(post_id)
            decision = self.access_gate.decide(request.principal, post)
            decision.ensure_writable(post)

            submission = normalize_submission(request.fields, partial=True)
            reject_blank_updates(submission)
            validate_cover_upload(request.cover_upload, self.upload_settings)

            changes: dict[str, Any] = {}

            if submission.title is not None:
                title = submission.title.strip()
                changes["title"] = title
                changes["slug"] = await self.post_service.claim_slug(
                    title, post.id, exclude_self=True
                )
            if submission.content is not None:
                changes["content"] = submission.content
            if submission.markdown is not None:
                changes["markdown"] = submission.markdown
            if submission.category_ids is not None:
                categories = await self.taxonomy_service.resolve_categories(
                    submission.category_ids
                )
                changes["category_ids"] = [CategoryId(c.id) for c in categories]
            if submission.tag_ids is not None:
                tags = await self.taxonomy_service.resolve_tags(submission.tag_ids)
                changes["tag_ids"] = [TagId(t.id) for t in tags]
            if submission.is_premium is not None:
                changes["is_premium"] = submission.is_premium
            if submission.published is not None:
                changes["published"] = submission.published
            if submission.post_type:
                changes["post_type"] = submission.post_type
            if submission.cover_image is not None and request.cover_upload is None:
                changes["cover_image"] = self._parse_cover_ref(submission.cover_image)

            new_cover: Optional[BlobRef] = None
            if request.cover_upload is not None:
                new_cover = await self.blob_store.store(request.cover_upload)
                changes["cover_image"] = new_cover

            changes["updated_at"] = datetime.now()
            # Re-validate through the model rather than model_copy
            updated_post = post.model_validate({**post.model_dump(), **changes})

            try:
                updated = await self.post_service.update_post(updated_post)
            except Exception:
                if new_cover is not None:
                    await self.blob_store.delete(new_cover)
                raise

            replaced_cover = post.cover_image
            if replaced_cover is not None and replaced_cover != updated.cover_image:
                self.after_commit.add(
                    "delete_replaced_cover",
                    lambda: self.blob_store.delete(replaced_cover),
                )

            populated = await self.post_populator.populate_one(updated)
            return UpdatePostResponse(
                message=UPDATED_MESSAGE,
                post=to_post_item(populated, self.upload_settings),
            )

    def _parse_cover_ref(self, raw: str) -> Optional[BlobRef]:
        """Accept a stored key, or the public URL path it is served under.

        An empty value removes the cover.
        """
        key = raw.strip()
        if not key:
            return None
        public_prefix = self.upload_settings.public_prefix.rstrip("/") + "/"
        if key.startswith(public_prefix):
            key = key[len(public_prefix) :]
        try:
            return BlobRef(key)
        except PydanticValidationError:
            raise ValidationError(
                "coverImage must be a stored image reference", fields=["coverImage"]
            )
