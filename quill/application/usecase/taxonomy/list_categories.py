"""List categories use case."""

import logfire
from pydantic import BaseModel

from quill.application.usecase.post.common import TaxonomyItem
from quill.application.usecase.taxonomy.common import to_item
from quill.domain.service import TaxonomyService


class ListCategoriesResponse(BaseModel):
    """List categories response."""

    categories: list[TaxonomyItem]


class ListCategoriesUseCase:
    """Use case for listing all categories."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        """Initialize list categories use case.

        Args:
            taxonomy_service: Taxonomy domain service
        """
        self.taxonomy_service = taxonomy_service

    async def execute(self) -> ListCategoriesResponse:
        """Execute list categories flow.

        Returns:
            All categories ordered by name
        """
        with logfire.span("list_categories.execute"):
            categories = await self.taxonomy_service.list_categories()
            return ListCategoriesResponse(categories=[to_item(c) for c in categories])
