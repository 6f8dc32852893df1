"""Create tag use case."""

import logfire
from pydantic import BaseModel

from quill.application.usecase.post.common import TaxonomyItem
from quill.application.usecase.taxonomy.common import require_admin, to_item
from quill.domain.service import TaxonomyService
from quill.domain.value import Principal


class CreateTagRequest(BaseModel):
    """Create tag request."""

    name: str
    principal: Principal


class CreateTagResponse(BaseModel):
    """Create tag response."""

    tag: TaxonomyItem


class CreateTagUseCase:
    """Use case for creating a tag (admins only)."""

    def __init__(self, taxonomy_service: TaxonomyService) -> None:
        self.taxonomy_service = taxonomy_service

    async def execute(self, request: CreateTagRequest) -> CreateTagResponse:
        """Create a tag whose slug derives from its name.

        Raises:
            ForbiddenError: If the requester is not an admin
            ValidationError: If the name is blank
            ConflictError: If the tag already exists
        """
        require_admin(request.principal)
        with logfire.span("create_tag.execute", name=request.name):
            tag = await self.taxonomy_service.create_tag(request.name)
            return CreateTagResponse(tag=to_item(tag))
