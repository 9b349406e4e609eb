"""Provider engine, converge actions and provider registration."""

from converge.providers.base import Provider, action, action_name
from converge.providers.converge_actions import ConvergeAction, ConvergeActions
from converge.providers.registry import (
    ProviderRegistry,
    ProviderSpec,
    create_provider,
    list_providers,
    register_provider,
)

__all__ = [
    "Provider",
    "action",
    "action_name",
    "ConvergeAction",
    "ConvergeActions",
    "ProviderRegistry",
    "ProviderSpec",
    "create_provider",
    "list_providers",
    "register_provider",
]
