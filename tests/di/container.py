"""Test container with in-memory infrastructure by default."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from quill.util.di import PROVIDERS, Component, get_provider


def mockable_components() -> set[Component]:
    return {
        p.__mock_component__
        for p in PROVIDERS
        if getattr(p, "__mock_component__", None) and p.__subclasses__()
    }


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where every mockable component is mocked.

    Mock repositories and the blob store are APP-scoped, so data written in
    one request scope is visible to the next within the same container.

    Args:
        unmock: Components to run with production implementations.
            Unmocking "persistence" needs a migrated Postgres at DATABASE__URL.

    Raises:
        ValueError: If an unknown component is requested

    Examples:
        container = build_test_container()
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    unknown = unmock - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    providers = []
    for base in PROVIDERS:
        component = getattr(base, "__mock_component__", None)
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*providers, FastapiProvider())
