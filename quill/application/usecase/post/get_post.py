"""Get post use case."""

from typing import Optional

import logfire
from pydantic import BaseModel, ValidationError as PydanticValidationError

from quill.application.usecase.post.common import PostItem, PostPopulator, to_post_item
from quill.config import UploadSettings
from quill.domain.error import NotFoundError
from quill.domain.service import AccessGate, PostService
from quill.domain.value import Principal, Slug


class GetPostRequest(BaseModel):
    """Get post request."""

    slug: str
    principal: Optional[Principal] = None  # None for anonymous readers


class GetPostResponse(BaseModel):
    """Get post response."""

    post: PostItem


class GetPostUseCase:
    """Use case for reading a single post by slug."""

    def __init__(
        self,
        post_service: PostService,
        access_gate: AccessGate,
        post_populator: PostPopulator,
        upload_settings: UploadSettings,
    ) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            access_gate: Visibility rules
            post_populator: Resolves author and taxonomy for responses
            upload_settings: Used to build cover image URLs
        """
        self.post_service = post_service
        self.access_gate = access_gate
        self.post_populator = post_populator
        self.upload_settings = upload_settings

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Reads by anyone other than the author or an admin count one view.

        Args:
            request: Slug and optional principal

        Returns:
            The populated post

        Raises:
            NotFoundError: If the post doesn't exist or is a draft the reader can't see
            ForbiddenError: If the post is premium and the reader isn't subscribed
        """
        try:
            slug = Slug(request.slug)
        except PydanticValidationError:
            raise NotFoundError("Post", request.slug)

        with logfire.span("get_post.execute", slug=str(slug)):
            post = await self.post_service.get_by_slug(slug)

            decision = self.access_gate.decide(request.principal, post)
            decision.ensure_readable(post)

            if decision.counts_view:
                post = await self.post_service.record_view(post)

            populated = await self.post_populator.populate_one(post)
            return GetPostResponse(post=to_post_item(populated, self.upload_settings))
