"""
Event dispatch for resource convergence.

Providers report lifecycle events to the run context's dispatcher, which
fans them out to every registered subscriber. Subscribers subclass
EventHandler and override only the hooks they care about.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    from converge.providers.base import Provider
    from converge.resources.resource import Resource


class EventHandler:
    """Base subscriber. Every hook is a no-op."""

    def resource_action_start(self, resource: Resource, action: str) -> None:
        pass

    def resource_current_state_loaded(
        self, resource: Resource, action: str, current_resource: Resource | None
    ) -> None:
        pass

    def resource_bypassed(self, resource: Resource, action: str, provider: Provider) -> None:
        """Called when why-run skips a provider that cannot simulate."""

    def resource_update_applied(
        self, resource: Resource, action: str, description: str, executed: bool
    ) -> None:
        pass

    def resource_updated(self, resource: Resource, action: str) -> None:
        pass

    def resource_up_to_date(self, resource: Resource, action: str) -> None:
        pass

    def resource_failed(self, resource: Resource, action: str, exception: BaseException) -> None:
        pass

    def resource_completed(self, resource: Resource) -> None:
        pass


class EventDispatcher(EventHandler):
    """Fans events out to subscribers in registration order."""

    def __init__(self, *subscribers: EventHandler) -> None:
        self._subscribers: List[EventHandler] = list(subscribers)

    @property
    def subscribers(self) -> List[EventHandler]:
        return list(self._subscribers)

    def register(self, subscriber: EventHandler) -> None:
        self._subscribers.append(subscriber)

    def _dispatch(self, hook: str, *args: Any) -> None:
        for subscriber in self._subscribers:
            getattr(subscriber, hook)(*args)

    def resource_action_start(self, resource, action):
        self._dispatch("resource_action_start", resource, action)

    def resource_current_state_loaded(self, resource, action, current_resource):
        self._dispatch("resource_current_state_loaded", resource, action, current_resource)

    def resource_bypassed(self, resource, action, provider):
        self._dispatch("resource_bypassed", resource, action, provider)

    def resource_update_applied(self, resource, action, description, executed):
        self._dispatch("resource_update_applied", resource, action, description, executed)

    def resource_updated(self, resource, action):
        self._dispatch("resource_updated", resource, action)

    def resource_up_to_date(self, resource, action):
        self._dispatch("resource_up_to_date", resource, action)

    def resource_failed(self, resource, action, exception):
        self._dispatch("resource_failed", resource, action, exception)

    def resource_completed(self, resource):
        self._dispatch("resource_completed", resource)
