"""Configuration for the label manager.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The token is read from `LABELS_GITHUB_TOKEN` first, then the `GH_TOKEN` /
`GITHUB_TOKEN` variables that the GitHub CLI and Actions already provide.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LabelManagerSettings(BaseSettings):
    """Settings for the label manager CLI.

    Environment variables:
    - LABELS_GITHUB_TOKEN (or GH_TOKEN / GITHUB_TOKEN)
    - GITHUB_BASE_URL     (optional)
    - LABELS_REPOSITORY   (optional default target, "owner/repo")
    - LABELS_CONFIG_FILE  (optional, defaults to labels.toml)
    - LOG_LEVEL           (optional)

    Notes:
        Tests can point at a specific env file via
        `LabelManagerSettings(_env_file=path_to_env)`.
    """

    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("LABELS_GITHUB_TOKEN", "GH_TOKEN", "GITHUB_TOKEN"),
        description="GitHub token used for API authentication",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    repository: str | None = Field(
        default=None,
        validation_alias="LABELS_REPOSITORY",
        description="Default target repository in the form 'owner/repo'",
    )

    config_file: Path = Field(
        default=Path("labels.toml"),
        validation_alias="LABELS_CONFIG_FILE",
        description="Label configuration file used by `apply` when none is given",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_github_auth(self) -> LabelManagerSettings:
        if not self.github_token.strip():
            raise ValueError("LABELS_GITHUB_TOKEN (or GH_TOKEN / GITHUB_TOKEN) is required")
        return self
