"""Test harness for unit, integration and E2E tests.

Settings are loaded from environment variables (configure via .env or export).
"""

import httpx
import pytest_asyncio

from quill.interface.api.app import create_app
from quill.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_post(unit_env):
            post_service = await unit_env.get(PostService)
            ...
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_client_fixture(unmock: set[Component] | None = None):
    """Factory for fixtures yielding an HTTP client bound to a test app.

    The fixture yields `(client, container)`: the container is the app's
    own, so tests can seed or inspect state the API sees.

    Usage:
        api = create_client_fixture()

        @pytest.mark.asyncio
        async def test_list_posts(api):
            client, container = api
            response = await client.get("/posts")
    """

    @pytest_asyncio.fixture
    async def _test_client():
        container = build_test_container(unmock=unmock or set())
        app = create_app(container=container)

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(
            transport=transport, base_url="http://testserver"
        ) as client:
            yield client, container

        await container.close()

    return _test_client
