"""Error types raised by the workout log."""

from __future__ import annotations


class MaplogError(Exception):
    """Base class for workout log errors."""


class InvalidWorkoutInput(MaplogError, ValueError):
    """Raised when a workout field is missing, non-numeric or out of range."""


class GeolocationUnavailable(MaplogError):
    """Raised when the current position cannot be obtained."""


class StorageUnreadable(MaplogError):
    """Raised when the persisted workout blob cannot be decoded."""
