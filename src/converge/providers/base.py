"""
Provider base class: converges one resource for one action.

A concrete provider implements load_current_resource() and one handler per
action, registered with the @action decorator. Handlers wrap each mutation
in converge_by() so that why-run mode can report the change instead of
making it. Providers whose handlers are written that way declare it by
overriding whyrun_supported(); under why-run, handlers of providers that
do not are never invoked at all.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, ClassVar, Dict, TypeVar

from converge.core.errors import UnsupportedActionError
from converge.events import EventDispatcher
from converge.logging import bind_context
from converge.node import Node
from converge.providers.converge_actions import ConvergeAction, ConvergeActions
from converge.resources import Resource
from converge.run_context import RunContext
from converge.shell_out import ShellOut

_ACTION_ATTR = "_converge_action"

F = TypeVar("F", bound=Callable[..., Any])


def action_name(name: str | Enum) -> str:
    """Normalize an action given as a string or enum member."""
    if isinstance(name, Enum):
        name = name.value
    return str(name)


def action(name: str | Enum) -> Callable[[F], F]:
    """
    Register a provider method as the handler for an action.

    Usage:
        class PackageProvider(Provider):
            @action("install")
            def action_install(self):
                ...
    """

    def decorator(func: F) -> F:
        setattr(func, _ACTION_ATTR, action_name(name))
        return func

    return decorator


def _collect_actions(cls: type) -> Dict[str, str]:
    actions: Dict[str, str] = {}
    for klass in reversed(cls.__mro__):
        for attr, value in vars(klass).items():
            registered = getattr(value, _ACTION_ATTR, None)
            if registered is not None:
                actions[registered] = attr
    return actions


class Provider(ShellOut):
    """Converges ``new_resource`` by running one of its registered actions."""

    # action name -> handler method name
    actions: ClassVar[Dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.actions = _collect_actions(cls)

    def __init__(
        self,
        new_resource: Resource,
        run_context: RunContext,
        action: str | Enum | None = None,
    ) -> None:
        self._new_resource = new_resource
        self._run_context = run_context
        self.action = action_name(action) if action is not None else None
        self.current_resource: Resource | None = None
        self.converge_actions = ConvergeActions()
        self._why_run: bool | None = None
        self._log = bind_context(provider=type(self).__name__, resource=str(new_resource))

    @property
    def new_resource(self) -> Resource:
        return self._new_resource

    @property
    def run_context(self) -> RunContext:
        return self._run_context

    @property
    def node(self) -> Node:
        return self._run_context.node

    @property
    def events(self) -> EventDispatcher:
        return self._run_context.events

    @property
    def why_run_mode(self) -> bool:
        """Mode of the invocation in progress, else the run context's mode."""
        if self._why_run is not None:
            return self._why_run
        return self._run_context.why_run

    @classmethod
    def supports_action(cls, name: str | Enum) -> bool:
        return action_name(name) in cls.actions

    def load_current_resource(self) -> None:
        """Populate current_resource from real system state."""
        raise NotImplementedError(
            f"{type(self).__name__} does not implement load_current_resource"
        )

    def whyrun_supported(self) -> bool:
        return False

    @action("nothing")
    def action_nothing(self) -> bool:
        return True

    def run_action(self, action: str | Enum | None = None, *, why_run: bool | None = None) -> None:
        """
        Converge the resource for ``action`` (defaults to the constructor's action).

        Args:
            action: Action to run; overrides the action given at construction
            why_run: Override the run context's why-run mode for this invocation

        Raises:
            UnsupportedActionError: No handler is registered for the action
        """
        if action is not None:
            self.action = action_name(action)
        if self.action is None:
            raise UnsupportedActionError(f"No action given for {self._new_resource}")

        self._why_run = self._run_context.why_run if why_run is None else why_run
        resource = self._new_resource
        log = self._log.bind(action=self.action, why_run=self._why_run)

        resource.reset_last_action()
        self.events.resource_action_start(resource, self.action)
        log.debug("provider_action_start")
        bypassed = False
        try:
            self.load_current_resource()
            self.events.resource_current_state_loaded(resource, self.action, self.current_resource)

            handler = self._resolve_handler(self.action)
            if self._why_run and not self.whyrun_supported():
                self._bypass(handler)
                bypassed = True
            else:
                handler()
        except Exception as exc:
            self._set_updated_status()
            self.events.resource_failed(resource, self.action, exc)
            log.error("provider_action_failed", error_type=type(exc).__name__, error=str(exc))
            raise
        else:
            if self._set_updated_status():
                self.events.resource_updated(resource, self.action)
            elif not bypassed:
                self.events.resource_up_to_date(resource, self.action)
        finally:
            log.debug(
                "provider_action_complete",
                executed=len(self.converge_actions.executed),
                **resource.to_dict(),
            )
            self.converge_actions.clear()
            self._why_run = None

        self.events.resource_completed(resource)

    def _set_updated_status(self) -> bool:
        """Mark the resource updated when any queued converge action executed."""
        if not self.converge_actions.any_executed:
            return False
        self._new_resource.mark_updated_by_last_action()
        return True

    def converge_by(
        self,
        description: str,
        body: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> ConvergeAction:
        """
        Declare one mutation. It runs immediately unless in why-run mode,
        in which case it is only recorded.

        Only meaningful from inside a handler; outside run_action the run
        context's mode decides and nothing drains the queue.
        """
        converge_action = ConvergeAction(description=description, body=body, args=args, kwargs=kwargs)
        self.converge_actions.add_action(converge_action, why_run=self.why_run_mode)
        self.events.resource_update_applied(
            self._new_resource, self.action, description, converge_action.executed
        )
        return converge_action

    def recipe_eval(self, body: Callable[[], Any]) -> Any:
        """Run ``body`` against a fresh resource collection, restoring the caller's afterwards."""
        with self._run_context.acquire_resource_collection():
            return body()

    def _resolve_handler(self, name: str) -> Callable[[], Any]:
        method_name = self.actions.get(name)
        if method_name is None:
            raise UnsupportedActionError(
                f"{type(self).__name__} does not support action '{name}'",
                details={"resource": str(self._new_resource), "supported": sorted(self.actions)},
            )
        return getattr(self, method_name)

    def _bypass(self, handler: Callable[[], Any]) -> None:
        # The whole handler stands in for one skipped action. It is never
        # queued, so the invocation records zero converge actions.
        skipped = ConvergeAction(
            description=f"would run action '{self.action}' on {self._new_resource}",
            body=handler,
        )
        self._log.info(
            "provider_whyrun_bypassed",
            action=self.action,
            description=skipped.description,
        )
        self.events.resource_bypassed(self._new_resource, self.action, self)


Provider.actions = _collect_actions(Provider)
