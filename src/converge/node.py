"""Node and cookbook data handed to a run context."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator


@dataclass
class Node:
    """The machine being converged: a name plus plain attribute data."""

    name: str | None = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.attributes[key]

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)


class CookbookCollection(Mapping):
    """Read-only mapping of cookbook name to cookbook object."""

    def __init__(self, cookbooks: Iterable[Any] = ()) -> None:
        self._cookbooks: Dict[str, Any] = {cookbook.name: cookbook for cookbook in cookbooks}

    def __getitem__(self, name: str) -> Any:
        return self._cookbooks[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._cookbooks)

    def __len__(self) -> int:
        return len(self._cookbooks)
