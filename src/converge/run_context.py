"""
Execution environment for one convergence run.

A RunContext holds node data, the cookbook collection, the event
dispatcher and exactly one active ResourceCollection. The active
collection is only ever swapped through acquire_resource_collection(),
which hands back a lease that restores the previous collection.
"""

from __future__ import annotations

from typing import Any

import structlog

from converge.config import get_settings
from converge.core.errors import CollectionLeaseError
from converge.events import EventDispatcher
from converge.node import CookbookCollection, Node
from converge.resources import ResourceCollection

logger = structlog.get_logger()


class CollectionLease:
    """
    Release handle for a swapped-in resource collection.

    Bound to the run context and the collection that was active before the
    swap. Releasing restores that exact reference; releasing twice is a no-op.
    Leases stack: only the most recently acquired live lease may release.
    Usable as a context manager, in which case the installed collection is
    what ``with`` binds.
    """

    def __init__(self, run_context: RunContext, collection: Any, previous: Any) -> None:
        self.run_context = run_context
        self.collection = collection
        self.previous = previous
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Restore the previous collection.

        Raises:
            CollectionLeaseError: A lease acquired after this one is still held
        """
        if self._released:
            return
        if self.run_context._resource_collection is not self.collection:
            raise CollectionLeaseError(
                "Resource collection leases must be released in reverse acquisition order",
                details={"active": repr(self.run_context._resource_collection)},
            )
        self.run_context._resource_collection = self.previous
        self._released = True
        logger.debug("resource_collection_restored", collection=repr(self.previous))

    def __enter__(self) -> Any:
        return self.collection

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class RunContext:
    """Shared execution environment for one convergence run."""

    def __init__(
        self,
        node: Node,
        cookbook_collection: CookbookCollection,
        events: EventDispatcher,
        *,
        why_run: bool | None = None,
        resource_collection: Any = None,
    ) -> None:
        self._node = node
        self._cookbook_collection = cookbook_collection
        self._events = events
        self.why_run = get_settings().why_run if why_run is None else why_run
        self._resource_collection = (
            ResourceCollection() if resource_collection is None else resource_collection
        )

    @property
    def node(self) -> Node:
        return self._node

    @property
    def cookbook_collection(self) -> CookbookCollection:
        return self._cookbook_collection

    @property
    def events(self) -> EventDispatcher:
        return self._events

    @property
    def resource_collection(self) -> Any:
        return self._resource_collection

    def acquire_resource_collection(
        self, collection: ResourceCollection | None = None
    ) -> CollectionLease:
        """Install ``collection`` (a fresh empty one by default) as the active collection."""
        if collection is None:
            collection = ResourceCollection()
        lease = CollectionLease(self, collection, self._resource_collection)
        self._resource_collection = collection
        logger.debug("resource_collection_swapped", collection=repr(collection))
        return lease
