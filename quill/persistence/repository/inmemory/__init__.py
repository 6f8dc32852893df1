"""In-memory repository implementations for testing."""

from .category import InMemoryCategoryRepository
from .post import InMemoryPostRepository
from .tag import InMemoryTagRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCategoryRepository",
    "InMemoryPostRepository",
    "InMemoryTagRepository",
    "InMemoryUserRepository",
]
