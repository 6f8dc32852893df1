"""List tags use case."""

import logfire
from pydantic import BaseModel

from quill.application.usecase.post.common import TaxonomyItem
from quill.application.usecase.taxonomy.common import to_item
from quill.domain.service import TaxonomyService


class ListTagsResponse(BaseModel):
    """List tags response."""

    tags: list[TaxonomyItem]


class ListTagsUseCase:
    """Use case for listing all tags."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize list tags use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(self) -> ListTagsResponse:
        """Execute list tags flow.

        Returns:
            All tags ordered by name
        """
        with logfire.span("list_tags.execute"):
            tags = await self.taxonomy_service.list_tags()
            return ListTagsResponse(tags=[to_item(t) for t in tags])
