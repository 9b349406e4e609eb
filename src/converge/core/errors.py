"""
Unified error types for the convergence engine.

Nothing in the engine recovers from these internally. Every error surfaces
to the driver that called ``Provider.run_action`` unchanged:

- UnsupportedActionError: the provider has no handler for the requested action
- ResourceNotFoundError: a collection lookup did not match any resource
- CollectionLeaseError: a collection lease was released out of order
- CommandFailedError: a shell command exited non-zero
- ConfigurationError: invalid settings
"""

from __future__ import annotations

from typing import Any


class ConvergeError(Exception):
    """Base exception for converge errors carrying structured details."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnsupportedActionError(ConvergeError):
    """Raised when a provider is asked to run an action it does not implement."""


class ResourceNotFoundError(ConvergeError):
    """Raised when a resource lookup in a collection fails."""


class CollectionLeaseError(ConvergeError):
    """Raised when resource collection leases are released out of order."""


class CommandFailedError(ConvergeError):
    """Raised when a command run through shell_out exits non-zero."""


class ConfigurationError(ConvergeError):
    """Raised for configuration-related errors."""


def format_error_message(error: ConvergeError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
