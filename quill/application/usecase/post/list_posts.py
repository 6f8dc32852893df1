"""List posts use case."""

from typing import Optional

import logfire
from pydantic import BaseModel, Field

from quill.application.usecase.post.common import PostItem, PostPopulator, to_post_item
from quill.config import PaginationSettings, UploadSettings
from quill.domain.model import Post
from quill.domain.repository import PostFilter
from quill.domain.service import AccessGate, Denial, PostService, TaxonomyService
from quill.domain.value import CategoryId, Pagination, Principal, TagId


class ListPostsRequest(BaseModel):
    """List posts request."""

    page: int = Field(default=1, ge=1)
    limit: Optional[int] = Field(default=None, ge=1)
    category: Optional[str] = None  # Category id or slug
    tag: Optional[str] = None  # Tag id or slug
    search: Optional[str] = None
    principal: Optional[Principal] = None


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    total: int
    total_pages: int
    current_page: int


class ListPostsUseCase:
    """Use case for listing posts newest first."""

    def __init__(
        self,
        post_service: PostService,
        taxonomy_service: TaxonomyService,
        access_gate: AccessGate,
        post_populator: PostPopulator,
        pagination_settings: PaginationSettings,
        upload_settings: UploadSettings,
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            taxonomy_service: Resolves category/tag filters
            access_gate: Decides whether drafts are listed
            post_populator: Resolves author and taxonomy for responses
            pagination_settings: Default and maximum page size
            upload_settings: Used to build cover image URLs
        """
        self.post_service = post_service
        self.taxonomy_service = taxonomy_service
        self.access_gate = access_gate
        self.post_populator = post_populator
        self.pagination_settings = pagination_settings
        self.upload_settings = upload_settings

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Only admins see drafts. Premium posts are listed for everyone, but
        their bodies are blanked for requesters without a subscription.

        Args:
            request: Paging, filters and optional principal

        Returns:
            One page of populated posts with paging metadata
        """
        limit = min(
            request.limit or self.pagination_settings.default_limit,
            self.pagination_settings.max_limit,
        )
        pagination = Pagination(page=request.page, limit=limit)

        with logfire.span(
            "list_posts.execute",
            page=pagination.page,
            limit=pagination.limit,
            category=request.category,
            tag=request.tag,
            search=request.search,
        ):
            post_filter = PostFilter(
                search=(request.search or "").strip() or None,
                published_only=not self.access_gate.sees_drafts(request.principal),
            )

            if request.category:
                category = await self.taxonomy_service.find_category(request.category)
                if category is None:
                    logfire.info("Unknown category filter", category=request.category)
                    return self._empty(pagination)
                post_filter.category_id = CategoryId(category.id)

            if request.tag:
                tag = await self.taxonomy_service.find_tag(request.tag)
                if tag is None:
                    logfire.info("Unknown tag filter", tag=request.tag)
                    return self._empty(pagination)
                post_filter.tag_id = TagId(tag.id)

            posts, total = await self.post_service.list_posts(post_filter, pagination)
            populated = await self.post_populator.populate(posts)

            items = [
                to_post_item(
                    p,
                    self.upload_settings,
                    hide_body=self._premium_locked(request.principal, p.post),
                )
                for p in populated
            ]

            return ListPostsResponse(
                posts=items,
                total=total,
                total_pages=pagination.total_pages(total),
                current_page=pagination.page,
            )

    def _premium_locked(self, principal: Optional[Principal], post: Post) -> bool:
        decision = self.access_gate.decide(principal, post)
        return decision.denial == Denial.PREMIUM

    @staticmethod
    def _empty(pagination: Pagination) -> ListPostsResponse:
        return ListPostsResponse(
            posts=[], total=0, total_pages=0, current_page=pagination.page
        )
