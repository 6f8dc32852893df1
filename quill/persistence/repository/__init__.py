"""PostgreSQL repository implementations."""

from quill.persistence.repository.category import PostgresCategoryRepository
from quill.persistence.repository.post import PostgresPostRepository
from quill.persistence.repository.tag import PostgresTagRepository
from quill.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCategoryRepository",
    "PostgresPostRepository",
    "PostgresTagRepository",
    "PostgresUserRepository",
]
