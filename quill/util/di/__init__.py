"""Dependency injection module."""

from typing import Type

from quill.util.di.application import ProdApplicationProvider
from quill.util.di.base import Component, ProviderBase
from quill.util.di.core import ProdConfigProvider
from quill.util.di.domain import ProdDomainProvider
from quill.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdStorageProvider,
    StorageProvider,
)
from quill.util.error import DependencyInjectionError

# Mockable components come last; tests swap them for in-memory variants
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
    StorageProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve the provider class to instantiate for `base`.

    Providers without subclasses are concrete and returned unchanged. A
    mockable component (persistence, storage) has one production and one
    mock subclass, told apart by `__is_mock__`.

    Raises:
        DependencyInjectionError: If the component lacks the requested variant
    """
    variants = base.__subclasses__()
    if not variants:
        return base

    for variant in variants:
        if getattr(variant, "__is_mock__", False) == use_mock:
            return variant

    component = getattr(base, "__mock_component__", None) or base.__name__
    kind = "mock" if use_mock else "production"
    raise DependencyInjectionError(f"No {kind} implementation for {component}")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "StorageProvider",
    "ProdPersistenceProvider",
    "ProdStorageProvider",
]
