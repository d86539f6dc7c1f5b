"""Typed failures shared by the configuration layer, the engine and the stores.

Stores classify their transport errors into these types themselves, so the
reconciliation engine never has to inspect error text.
"""

from __future__ import annotations


class LabelManagerError(Exception):
    """Base class for every failure this package raises on purpose."""


class InvalidConfig(LabelManagerError):
    """The configuration document is unreadable or malformed."""


class InvalidInput(LabelManagerError):
    """A value (typically a colour) was rejected before or by the store."""


class NotFound(LabelManagerError):
    """The named label does not exist in the remote store."""

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"Label not found: {name!r}")


class AlreadyExists(LabelManagerError):
    """A label with the requested name already exists in the remote store."""

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"Label already exists: {name!r}")


class RemoteUnavailable(LabelManagerError):
    """Transport, authentication or server failure talking to the store."""
