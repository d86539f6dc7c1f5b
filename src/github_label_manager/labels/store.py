"""The remote label store capability consumed by the reconciliation engine."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class RemoteLabel:
    """A label as the remote store reports it."""

    name: str
    color: str
    description: str | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class LabelUpdate:
    """A partial label edit. `None` fields are left unchanged."""

    new_name: str | None = None
    color: str | None = None
    description: str | None = None


class LabelStore(Protocol):
    """Named-label CRUD against a remote issue tracker.

    Implementations raise the typed errors from `github_label_manager.errors`:
    - `create_label` raises `AlreadyExists` when the name is taken
    - `get_label`, `update_label` and `delete_label` raise `NotFound` when absent
    - transport or auth failures raise `RemoteUnavailable`
    """

    def list_labels(self) -> Sequence[RemoteLabel]: ...

    def get_label(self, name: str) -> RemoteLabel: ...

    def create_label(
        self, name: str, color: str, description: str | None = None
    ) -> RemoteLabel: ...

    def update_label(self, name: str, update: LabelUpdate) -> RemoteLabel: ...

    def delete_label(self, name: str) -> None: ...
