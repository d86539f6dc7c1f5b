"""Declarative label configuration (TOML).

A document has two optional top-level sequences:

    delete = ["wontfix"]

    [[labels]]
    name = "bug"
    color = "d73a49"
    description = "Something isn't working"
    update_if_match = ["Bug", "bug-report"]
    skip_if_exists = false
    update_if_exists = false

Other top-level keys (e.g. a template `description`) are ignored. Unknown keys
inside a label entry are ignored with a warning.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from github_label_manager.errors import InvalidConfig

logger = logging.getLogger(__name__)


class LabelDeclaration(BaseModel):
    """One desired end-state label."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    name: str
    # Absent colour means the declaration only updates an existing label.
    color: str | None = None
    description: str | None = None
    rename_from: list[str] = Field(default_factory=list, alias="update_if_match")
    skip_if_exists: bool = False
    update_if_exists: bool = False

    @model_validator(mode="before")
    @classmethod
    def _warn_unknown_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            known = set(cls.model_fields) | {"update_if_match"}
            unknown = sorted(str(key) for key in data if key not in known)
            if unknown:
                logger.warning(
                    "Ignoring unknown label keys",
                    extra={"label": data.get("name"), "keys": unknown},
                )
        return data


class LabelConfig(BaseModel):
    """Parsed configuration: labels to reconcile and label names to delete."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    labels: list[LabelDeclaration] = Field(default_factory=list)
    delete: list[str] = Field(default_factory=list)

    def has_actions(self) -> bool:
        return bool(self.labels) or bool(self.delete)


def parse_config(text: str, *, source: str = "<string>") -> LabelConfig:
    """Parse a TOML document into a `LabelConfig`.

    Raises:
        InvalidConfig on TOML syntax errors or schema violations.
    """

    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise InvalidConfig(f"Failed to parse TOML config {source}: {e}") from e

    try:
        config = LabelConfig.model_validate(raw)
    except ValidationError as e:
        raise InvalidConfig(f"Invalid label config {source}: {e}") from e

    logger.debug(
        "Label config parsed",
        extra={"source": source, "labels": len(config.labels), "delete": len(config.delete)},
    )
    return config


def load_config(path: Path) -> LabelConfig:
    """Read and parse the configuration file at `path`."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidConfig(f"Failed to read config file {path}: {e}") from e
    return parse_config(text, source=str(path))
