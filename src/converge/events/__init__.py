"""Convergence lifecycle events."""

from converge.events.dispatcher import EventDispatcher, EventHandler

__all__ = [
    "EventDispatcher",
    "EventHandler",
]
