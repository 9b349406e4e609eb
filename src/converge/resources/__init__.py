"""Resources and resource collections."""

from converge.resources.collection import ResourceCollection
from converge.resources.resource import Resource

__all__ = [
    "Resource",
    "ResourceCollection",
]
