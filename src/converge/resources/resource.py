"""Desired-state resource records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from converge.run_context import RunContext


class Resource:
    """
    A desired-state record to be converged by a provider.

    Two flags track mutation:
    - updated: ever changed during this object's lifetime (never cleared)
    - updated_by_last_action: changed by the most recent action invocation
    """

    resource_name = "resource"

    def __init__(
        self,
        name: str,
        run_context: RunContext | None = None,
        *,
        cookbook_name: str | None = None,
    ) -> None:
        self.name = name
        self.run_context = run_context
        self.cookbook_name = cookbook_name
        self._updated = False
        self._updated_by_last_action = False

    @property
    def updated(self) -> bool:
        return self._updated

    @property
    def updated_by_last_action(self) -> bool:
        return self._updated_by_last_action

    def mark_updated_by_last_action(self) -> None:
        """Record that the current action executed at least one mutation."""
        self._updated_by_last_action = True
        self._updated = True

    def reset_last_action(self) -> None:
        self._updated_by_last_action = False

    @property
    def identity(self) -> str:
        return f"{self.resource_name}[{self.name}]"

    def to_dict(self) -> dict[str, Any]:
        return {
            "resource": self.identity,
            "cookbook_name": self.cookbook_name,
            "updated": self._updated,
            "updated_by_last_action": self._updated_by_last_action,
        }

    def __str__(self) -> str:
        return self.identity

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.identity}>"
