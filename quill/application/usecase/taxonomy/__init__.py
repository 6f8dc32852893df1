"""Category and tag use cases."""

from .create_category import (
    CreateCategoryRequest,
    CreateCategoryResponse,
    CreateCategoryUseCase,
)
from .create_tag import CreateTagRequest, CreateTagResponse, CreateTagUseCase
from .list_categories import ListCategoriesResponse, ListCategoriesUseCase
from .list_tags import ListTagsResponse, ListTagsUseCase

__all__ = [
    "CreateCategoryRequest",
    "CreateCategoryResponse",
    "CreateCategoryUseCase",
    "CreateTagRequest",
    "CreateTagResponse",
    "CreateTagUseCase",
    "ListCategoriesResponse",
    "ListCategoriesUseCase",
    "ListTagsResponse",
    "ListTagsUseCase",
]
