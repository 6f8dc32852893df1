"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum

from pydantic import Field, field_validator

from quill.domain.value.common import RootValueObject, ValueObject
from quill.domain.value.identifiers import UserId


class Role(str, Enum):
    """User role."""

    USER = "user"
    ADMIN = "admin"


class Slug(RootValueObject[str]):
    """URL-safe slug for posts, categories and tags.

    Must be lowercase, alphanumeric with hyphens, 1-100 characters.
    Examples: 'hello-world', 'ui-ux-design'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) > 100:
            raise ValueError("Slug must be 1-100 characters")
        return v


class BlobRef(RootValueObject[str]):
    """Stable reference to an object in the blob store.

    A relative key such as 'posts/3f2a...c1.png', never a full URL.
    """

    @field_validator("root")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Reject empty keys, absolute paths and traversal."""
        if not v or v.startswith("/") or ".." in v.split("/"):
            raise ValueError("Blob reference must be a relative key")
        if "://" in v:
            raise ValueError("Blob reference must not be a URL")
        return v


class Principal(ValueObject):
    """The authenticated identity making a request."""

    id: UserId
    role: Role = Role.USER
    is_premium: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class Pagination(ValueObject):
    """Page/limit pagination window."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        """Number of pages needed to show `total` items."""
        return -(-total // self.limit)
