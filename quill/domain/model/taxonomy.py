"""Category and Tag entities.

Flat, unhierarchical reference data classifying posts.
"""

from pydantic import Field

from quill.domain.model.common import DomainModel
from quill.domain.value import CategoryId, Slug, TagId


class Category(DomainModel):
    """Post category. Name and slug are both unique."""

    id: CategoryId
    name: str = Field(min_length=1, max_length=100)
    slug: Slug


class Tag(DomainModel):
    """Post tag. Name and slug are both unique."""

    id: TagId
    name: str = Field(min_length=1, max_length=100)
    slug: Slug
