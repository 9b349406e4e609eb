from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Type

from converge.providers.base import Provider


@dataclass(frozen=True)
class ProviderSpec:
    """Metadata describing a provider registered for a resource type."""

    name: str
    provider_class: Type[Provider]
    version: str | None = None
    description: str | None = None


class ProviderRegistry:
    """Simple in-memory registry mapping resource types to provider classes."""

    def __init__(self) -> None:
        self._providers: Dict[str, ProviderSpec] = {}

    def register(
        self,
        name: str,
        provider_class: Type[Provider],
        *,
        version: str | None = None,
        description: str | None = None,
    ) -> None:
        if not name:
            raise ValueError("Resource type name is required")
        spec = ProviderSpec(
            name=name,
            provider_class=provider_class,
            version=version,
            description=description,
        )
        self._providers[name] = spec

    def get(self, name: str) -> ProviderSpec | None:
        return self._providers.get(name)

    def create(self, name: str, **kwargs: Any) -> Provider:
        spec = self.get(name)
        if spec is None:
            raise KeyError(f"No provider registered for resource type '{name}'")
        return spec.provider_class(**kwargs)

    def list(self) -> List[ProviderSpec]:
        return list(self._providers.values())

    def supports(self, name: str, action: str | Enum) -> bool:
        """Whether the provider for ``name`` registers a handler for ``action``."""
        spec = self.get(name)
        return spec is not None and spec.provider_class.supports_action(action)


provider_registry = ProviderRegistry()


def register_provider(
    name: str,
    provider_class: Type[Provider],
    *,
    version: str | None = None,
    description: str | None = None,
) -> None:
    provider_registry.register(name, provider_class, version=version, description=description)


def create_provider(name: str, **kwargs: Any) -> Provider:
    return provider_registry.create(name, **kwargs)


def list_providers() -> List[ProviderSpec]:
    return provider_registry.list()
