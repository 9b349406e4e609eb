"""Convergence-action engine: providers, why-run simulation and scoped resource collections."""

from converge.events import EventDispatcher, EventHandler
from converge.node import CookbookCollection, Node
from converge.providers import ConvergeAction, Provider, action
from converge.resources import Resource, ResourceCollection
from converge.run_context import CollectionLease, RunContext

__version__ = "0.1.0"

__all__ = [
    "CollectionLease",
    "ConvergeAction",
    "CookbookCollection",
    "EventDispatcher",
    "EventHandler",
    "Node",
    "Provider",
    "Resource",
    "ResourceCollection",
    "RunContext",
    "action",
]
