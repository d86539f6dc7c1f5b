"""Label configuration model, reconciliation engine and outcome reporting."""

from github_label_manager.labels.colors import normalize_color
from github_label_manager.labels.config import (
    LabelConfig,
    LabelDeclaration,
    load_config,
    parse_config,
)
from github_label_manager.labels.outcomes import Outcome, OutcomeAction
from github_label_manager.labels.reconcile import plan_declaration, reconcile
from github_label_manager.labels.report import Summary, render_report, summarize
from github_label_manager.labels.store import LabelStore, LabelUpdate, RemoteLabel

__all__ = [
    "LabelConfig",
    "LabelDeclaration",
    "LabelStore",
    "LabelUpdate",
    "Outcome",
    "OutcomeAction",
    "RemoteLabel",
    "Summary",
    "load_config",
    "normalize_color",
    "parse_config",
    "plan_declaration",
    "reconcile",
    "render_report",
    "summarize",
]
