"""Test configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from github_label_manager.errors import AlreadyExists, LabelManagerError, NotFound
from github_label_manager.labels.store import LabelUpdate, RemoteLabel


class InMemoryLabelStore:
    """Label store double that enforces name uniqueness and records every call."""

    def __init__(self, labels: list[RemoteLabel] | None = None) -> None:
        self.labels: dict[str, RemoteLabel] = {label.name: label for label in labels or []}
        self.calls: list[tuple[str, str]] = []
        # name -> error raised by any call that targets that name
        self.failures: dict[str, LabelManagerError] = {}

    def _check(self, op: str, name: str) -> None:
        self.calls.append((op, name))
        if name in self.failures:
            raise self.failures[name]

    def connect(self) -> None:
        pass

    def list_labels(self) -> list[RemoteLabel]:
        self.calls.append(("list", "*"))
        return list(self.labels.values())

    def get_label(self, name: str) -> RemoteLabel:
        self._check("get", name)
        if name not in self.labels:
            raise NotFound(name)
        return self.labels[name]

    def create_label(self, name: str, color: str, description: str | None = None) -> RemoteLabel:
        self._check("create", name)
        if name in self.labels:
            raise AlreadyExists(name)
        label = RemoteLabel(name=name, color=color, description=description)
        self.labels[name] = label
        return label

    def update_label(self, name: str, update: LabelUpdate) -> RemoteLabel:
        self._check("update", name)
        if name not in self.labels:
            raise NotFound(name)
        current = self.labels[name]
        new_name = update.new_name or current.name
        if new_name != name and new_name in self.labels:
            raise AlreadyExists(new_name)
        label = RemoteLabel(
            name=new_name,
            color=update.color or current.color,
            description=(
                update.description if update.description is not None else current.description
            ),
        )
        del self.labels[name]
        self.labels[new_name] = label
        return label

    def delete_label(self, name: str) -> None:
        self._check("delete", name)
        if name not in self.labels:
            raise NotFound(name)
        del self.labels[name]


@pytest.fixture
def store() -> InMemoryLabelStore:
    """Provide a store seeded with a couple of GitHub default labels."""
    return InMemoryLabelStore(
        [
            RemoteLabel(name="Bug", color="d73a4a", description="Something isn't working"),
            RemoteLabel(name="enhancement", color="a2eeef", description="New feature"),
        ]
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Provide a path for a label config file inside a temp directory."""
    return tmp_path / "labels.toml"


@pytest.fixture
def make_store() -> type[InMemoryLabelStore]:
    """Provide the in-memory store class for tests that need custom seeds."""
    return InMemoryLabelStore
