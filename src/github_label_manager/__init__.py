"""GitHub label manager.

Declarative label management for a GitHub repository:
- labels declared in a TOML file
- reconciliation (rename / create / update / skip / delete) with per-item outcomes
- configuration loaded from `.env` and structured logging
"""

__version__ = "0.1.0"

from github_label_manager.config import LabelManagerSettings

__all__ = ["__version__", "LabelManagerSettings"]
