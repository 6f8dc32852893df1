"""Shared taxonomy models and checks."""

from typing import Optional

from quill.application.usecase.post.common import TaxonomyItem
from quill.domain.error import ForbiddenError
from quill.domain.model import Category, Tag
from quill.domain.value import Principal


def to_item(entity: Category | Tag) -> TaxonomyItem:
    return TaxonomyItem(id=str(entity.id), name=entity.name, slug=str(entity.slug))


def require_admin(principal: Optional[Principal]) -> None:
    """Raises ForbiddenError unless the principal is an admin."""
    if principal is None or not principal.is_admin:
        raise ForbiddenError("Admin access required")
