"""Category routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel

from quill.application.usecase.post import TaxonomyItem
from quill.application.usecase.taxonomy import (
    CreateCategoryRequest,
    CreateCategoryUseCase,
    ListCategoriesUseCase,
)
from quill.domain.service import IdentityService
from quill.interface.api.auth import require_principal
from quill.interface.api.schemas import ApiResponse, CountedResponse

router = APIRouter(prefix="/categories", tags=["categories"], route_class=DishkaRoute)


class CreateCategoryAPIRequest(BaseModel):
    """API request for creating a category."""

    name: str = ""


@router.get("", response_model=CountedResponse[list[TaxonomyItem]])
async def list_categories(
    list_categories_use_case: FromDishka[ListCategoriesUseCase],
) -> CountedResponse[list[TaxonomyItem]]:
    """List all categories ordered by name."""
    result = await list_categories_use_case.execute()
    return CountedResponse(count=len(result.categories), data=result.categories)


@router.post(
    "",
    response_model=ApiResponse[TaxonomyItem],
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    request: CreateCategoryAPIRequest,
    create_category_use_case: FromDishka[CreateCategoryUseCase],
    identity_service: FromDishka[IdentityService],
    authorization: Optional[str] = Header(default=None),
) -> ApiResponse[TaxonomyItem]:
    """Create a category. Admins only."""
    principal = await require_principal(identity_service, authorization)
    result = await create_category_use_case.execute(
        CreateCategoryRequest(name=request.name, principal=principal)
    )
    return ApiResponse(data=result.category)
