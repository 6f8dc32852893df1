"""Domain value objects."""

from quill.domain.value.identifiers import (
    CategoryId,
    PostId,
    TagId,
    UserId,
)
from quill.domain.value.types import (
    BlobRef,
    Pagination,
    Principal,
    Role,
    Slug,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CategoryId",
    "TagId",
    # Types
    "BlobRef",
    "Pagination",
    "Principal",
    "Role",
    "Slug",
]
