"""Dependency injection wiring.

Providers are grouped by layer. A provider base with subclasses is a
mockable component: its subclasses are the production and mock variants,
told apart by `__is_mock__`. Bases without subclasses are used as they are.
"""

from typing import Type

from stackit.util.di.application import ProdApplicationProvider
from stackit.util.di.base import Component, ProviderBase
from stackit.util.di.core import ProdConfigProvider
from stackit.util.di.domain import ProdDomainProvider
from stackit.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider
from stackit.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,  # mockable: PostgreSQL or in-memory
]


def get_provider(base: Type[ProviderBase], use_mock: bool = False) -> Type[ProviderBase]:
    """Select the provider class to instantiate for a base.

    Args:
        base: Provider base class from PROVIDERS
        use_mock: Pick the mock variant of a mockable component

    Returns:
        Provider class (not instantiated)

    Raises:
        DependencyInjectionError: If the component has no variant of that kind
    """
    variants = base.__subclasses__()
    if not variants:
        return base

    for variant in variants:
        if getattr(variant, "__is_mock__", False) == use_mock:
            return variant

    kind = "mock" if use_mock else "production"
    component = getattr(base, "__mock_component__", base.__name__)
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
    "ProdPersistenceProvider",
]
