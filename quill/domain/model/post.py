"""Post aggregate root."""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from quill.domain.model.common import DomainModel
from quill.domain.model.taxonomy import Category, Tag
from quill.domain.model.user import User
from quill.domain.value import BlobRef, CategoryId, PostId, Slug, TagId, UserId


class Post(DomainModel):
    """Post aggregate root.

    The body is stored twice: `content` and `markdown`. Both must be present;
    the submission pipeline back-fills one from the other.
    """

    id: PostId
    title: str = Field(min_length=1, max_length=300)
    slug: Slug
    content: str = Field(min_length=1)
    markdown: str = Field(min_length=1)
    author_id: UserId
    category_ids: list[CategoryId] = Field(default_factory=list)
    tag_ids: list[TagId] = Field(default_factory=list)
    cover_image: Optional[BlobRef] = None
    is_premium: bool = False
    published: bool = False
    post_type: str = "article"
    views: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_unique_references(self) -> "Post":
        """Reject duplicate category/tag references."""
        if len(set(self.category_ids)) != len(self.category_ids):
            raise ValueError("Duplicate category reference")
        if len(set(self.tag_ids)) != len(self.tag_ids):
            raise ValueError("Duplicate tag reference")
        return self

    def is_authored_by(self, user_id: UserId) -> bool:
        return self.author_id == user_id


class PopulatedPost(DomainModel):
    """A post with its author and taxonomy resolved to entities."""

    post: Post
    author: Optional[User] = None  # None if the author account is gone
    categories: list[Category] = Field(default_factory=list)
    tags: list[Tag] = Field(default_factory=list)
