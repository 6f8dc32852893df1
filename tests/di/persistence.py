"""Mock persistence providers for testing."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from quill.domain.repository import (
    AfterCommit,
    CategoryRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from quill.persistence.repository.inmemory import (
    InMemoryCategoryRepository,
    InMemoryPostRepository,
    InMemoryTagRepository,
    InMemoryUserRepository,
)
from quill.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so every request against one container sees the same
    data; each test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    async def get_after_commit(self) -> AsyncIterator[AfterCommit]:
        """Provide after-commit hooks, run when the request scope closes.

        In-memory writes are durable immediately, so leaving the scope
        without an error plays the part of a commit.
        """
        after_commit = AfterCommit()
        yield after_commit
        await after_commit.run()

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_post_repository(self) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository()

    @provide(scope=Scope.APP)
    def get_category_repository(self) -> CategoryRepository:
        """Provide in-memory category repository."""
        return InMemoryCategoryRepository()

    @provide(scope=Scope.APP)
    def get_tag_repository(self) -> TagRepository:
        """Provide in-memory tag repository."""
        return InMemoryTagRepository()
