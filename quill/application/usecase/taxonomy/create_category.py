"""Create category use case."""

import logfire
from pydantic import BaseModel

from quill.application.usecase.post.common import TaxonomyItem
from quill.application.usecase.taxonomy.common import require_admin, to_item
from quill.domain.service import TaxonomyService
from quill.domain.value import Principal


class CreateCategoryRequest(BaseModel):
    """Create category request."""

    name: str
    principal: Principal


class CreateCategoryResponse(BaseModel):
    """Create category response."""

    category: TaxonomyItem


class CreateCategoryUseCase:
    """Use case for creating a category (admins only)."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self, request: CreateCategoryRequest) -> CreateCategoryResponse:
        """Create a category whose slug derives from its name.

        Raises:
            ForbiddenError: If the requester is not an admin
            ValidationError: If the name is blank
            ConflictError: If the category already exists
        """
        require_admin(request.principal)
        with logfire.span("create_category.execute", name=request.name):
            category = await self.taxonomy_service.create_category(request.name)
            return CreateCategoryResponse(category=to_item(category))
