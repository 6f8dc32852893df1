"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from quill.domain.repository.category import CategoryRepository
from quill.domain.repository.post import PostFilter, PostRepository
from quill.domain.repository.tag import TagRepository
from quill.domain.repository.transaction import AfterCommit
from quill.domain.repository.user import UserRepository

__all__ = [
    "AfterCommit",
    "CategoryRepository",
    "PostFilter",
    "PostRepository",
    "TagRepository",
    "UserRepository",
]
