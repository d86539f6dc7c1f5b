#!/usr/bin/env python3
"""Programmatic label reconciliation example.

This demonstrates using the label manager components directly:

* load settings from `.env`
* parse a TOML label config
* preview (or apply) the changes and print the per-label outcomes

Repository selection is passed as an argument (not read from `.env`).
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from github_label_manager.config import LabelManagerSettings
from github_label_manager.github.client import GitHubLabelStore
from github_label_manager.labels import load_config, reconcile, render_report, summarize
from github_label_manager.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile labels (programmatic example).")
    parser.add_argument("--repo", required=True, help='Target repository in the form "owner/repo"')
    parser.add_argument(
        "--config",
        default=str(Path(__file__).with_name("labels.toml")),
        help="Path to a TOML label config",
    )
    parser.add_argument("--apply", action="store_true", help="Apply changes (default: dry run)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = LabelManagerSettings()
    configure_logging(settings.log_level)

    store = GitHubLabelStore(
        token=settings.github_token,
        repository=args.repo,
        base_url=settings.github_base_url,
    )
    dry_run = not args.apply

    try:
        outcomes = reconcile(load_config(Path(args.config)), store, dry_run=dry_run)
    finally:
        store.close()

    summary = summarize(outcomes)
    for line in render_report(outcomes, summary, dry_run=dry_run):
        print(line)
    return 1 if summary.has_failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
