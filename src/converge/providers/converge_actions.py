"""Converge actions: individual mutations declared by provider handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Tuple

import structlog

logger = structlog.get_logger()


@dataclass
class ConvergeAction:
    """A single mutation: a description for reporting plus the body that performs it."""

    description: str
    body: Callable[..., Any]
    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)
    executed: bool = False

    def run(self) -> Any:
        result = self.body(*self.args, **self.kwargs)
        self.executed = True
        return result


class ConvergeActions:
    """
    FIFO queue of converge actions for one provider invocation.

    add_action() decides execute-now vs. record-only from the why-run mode.
    Executed actions run inline, so a handler never needs a second pass to
    apply its queued work; the queue exists for counting and reporting.
    """

    def __init__(self) -> None:
        self._actions: List[ConvergeAction] = []

    def add_action(self, action: ConvergeAction, *, why_run: bool) -> ConvergeAction:
        if why_run:
            logger.info("converge_action_skipped", description=action.description)
        else:
            # A raising body never reaches the queue.
            action.run()
            logger.debug("converge_action_executed", description=action.description)
        self._actions.append(action)
        return action

    @property
    def empty(self) -> bool:
        return not self._actions

    @property
    def executed(self) -> List[ConvergeAction]:
        return [action for action in self._actions if action.executed]

    @property
    def any_executed(self) -> bool:
        return any(action.executed for action in self._actions)

    def clear(self) -> None:
        self._actions.clear()

    def __iter__(self) -> Iterator[ConvergeAction]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)
