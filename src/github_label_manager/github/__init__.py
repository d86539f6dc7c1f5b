"""GitHub transport for the label store."""

from github_label_manager.github.client import GitHubLabelStore

__all__ = ["GitHubLabelStore"]
