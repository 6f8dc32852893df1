"""Tag routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel

from quill.application.usecase.post import TaxonomyItem
from quill.application.usecase.taxonomy import (
    CreateTagRequest,
    CreateTagUseCase,
    ListTagsUseCase,
)
from quill.domain.service import IdentityService
from quill.interface.api.auth import require_principal
from quill.interface.api.schemas import ApiResponse, CountedResponse

router = APIRouter(prefix="/tags", tags=["tags"], route_class=DishkaRoute)


class CreateTagAPIRequest(BaseModel):
    """API request for creating a tag."""

    name: str = ""


@router.get("", response_model=CountedResponse[list[TaxonomyItem]])
async def list_tags(
    list_tags_use_case: FromDishka[ListTagsUseCase],
) -> CountedResponse[list[TaxonomyItem]]:
    """List all tags ordered by name."""
    result = await list_tags_use_case.execute()
    return CountedResponse(count=len(result.tags), data=result.tags)


@router.post(
    "",
    response_model=ApiResponse[TaxonomyItem],
    status_code=status.HTTP_201_CREATED,
)
async def create_tag(
    request: CreateTagAPIRequest,
    create_tag_use_case: FromDishka[CreateTagUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[TaxonomyItem]:
    """Create a tag. Admins only."""
    principal = await require_principal(identity_service, authorization)
    result = await create_tag_use_case.execute(
        CreateTagRequest(name=request.name, principal=principal)
    )
    return ApiResponse(data=result.tag)
