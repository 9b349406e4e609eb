"""Core modules for converge - centralized error definitions."""

from converge.core.errors import (
    CollectionLeaseError,
    CommandFailedError,
    ConfigurationError,
    ConvergeError,
    ResourceNotFoundError,
    UnsupportedActionError,
    format_error_message,
)

__all__ = [
    "ConvergeError",
    "UnsupportedActionError",
    "ResourceNotFoundError",
    "CollectionLeaseError",
    "CommandFailedError",
    "ConfigurationError",
    "format_error_message",
]
