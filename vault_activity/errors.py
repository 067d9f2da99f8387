"""Central error types used across the application."""

from __future__ import annotations


class VaultActivityError(RuntimeError):
    """Base error for vault activity failures."""


class ActivityFetchError(VaultActivityError):
    """Raised when the activity API cannot be reached or returns bad data."""


class InvalidViewStateError(ValueError):
    """Raised when a filter or sort selection string is not recognised."""


__all__ = [
    "VaultActivityError",
    "ActivityFetchError",
    "InvalidViewStateError",
]
