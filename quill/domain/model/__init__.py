"""Domain model entities."""

from quill.domain.model.post import PopulatedPost, Post
from quill.domain.model.taxonomy import Category, Tag
from quill.domain.model.user import User

__all__ = [
    "Category",
    "PopulatedPost",
    "Post",
    "Tag",
    "User",
]
