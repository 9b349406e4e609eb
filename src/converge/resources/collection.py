"""Ordered resource collection (convergence order)."""

from __future__ import annotations

from typing import Iterator, List

from converge.core.errors import ResourceNotFoundError
from converge.resources.resource import Resource


class ResourceCollection:
    """Ordered, mutable sequence of resources. Order is convergence order."""

    def __init__(self) -> None:
        self._resources: List[Resource] = []

    def insert(self, resource: Resource) -> None:
        """Append a resource at the end of the convergence order."""
        self._resources.append(resource)

    def all_resources(self) -> List[Resource]:
        return list(self._resources)

    def lookup(self, key: str) -> Resource:
        """Find the first resource matching ``type[name]``."""
        for resource in self._resources:
            if resource.identity == key:
                return resource
        raise ResourceNotFoundError(
            f"Cannot find a resource matching {key}",
            details={"collection_size": len(self._resources)},
        )

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def __getitem__(self, index: int) -> Resource:
        return self._resources[index]

    def __repr__(self) -> str:
        return f"<ResourceCollection size={len(self._resources)}>"
