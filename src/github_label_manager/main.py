"""CLI entrypoint for the label manager."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from github_label_manager import __version__
from github_label_manager.config import LabelManagerSettings
from github_label_manager.errors import (
    AlreadyExists,
    InvalidConfig,
    InvalidInput,
    LabelManagerError,
    NotFound,
    RemoteUnavailable,
)
from github_label_manager.github.client import GitHubLabelStore
from github_label_manager.labels.colors import normalize_color
from github_label_manager.labels.config import load_config
from github_label_manager.labels.reconcile import reconcile
from github_label_manager.labels.report import render_report, summarize
from github_label_manager.labels.store import LabelUpdate, RemoteLabel
from github_label_manager.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-labels",
        description="Declarative GitHub label management",
    )
    parser.add_argument(
        "--version", action="version", version=f"github-label-manager {__version__}"
    )
    parser.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help="Target repository in the form 'owner/repo' (defaults to LABELS_REPOSITORY)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List all labels")

    get = subparsers.add_parser("get", help="Show a single label")
    get.add_argument("name", help="Label name")

    create = subparsers.add_parser("create", help="Create a new label")
    create.add_argument("name", help="Label name")
    create.add_argument("color", help="Label color as 6 hex digits, e.g. 'ff0000'")
    create.add_argument("-d", "--description", default=None, help="Optional description")

    update = subparsers.add_parser("update", help="Update an existing label")
    update.add_argument("name", help="Label name to update")
    update.add_argument("--new-name", default=None, help="New label name")
    update.add_argument("--color", default=None, help="New color as 6 hex digits")
    update.add_argument("--description", default=None, help="New description")

    delete = subparsers.add_parser("delete", help="Delete a label")
    delete.add_argument("name", help="Label name to delete")
    delete.add_argument(
        "-f", "--force", action="store_true", help="Delete without asking for confirmation"
    )

    apply = subparsers.add_parser("apply", help="Apply label changes from a TOML config file")
    apply.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Path to the TOML config file (defaults to LABELS_CONFIG_FILE or labels.toml)",
    )
    apply.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Show what would be done without making changes",
    )
    apply.add_argument(
        "-s",
        "--skip-existing",
        action="store_true",
        help="Skip labels that already exist instead of failing",
    )

    return parser


def _build_store(settings: LabelManagerSettings, repository: str) -> GitHubLabelStore:
    return GitHubLabelStore(
        token=settings.github_token,
        repository=repository,
        base_url=settings.github_base_url,
    )


def _format_label(label: RemoteLabel) -> list[str]:
    lines = [f"  Name:        {label.name}", f"  Color:       #{label.color}"]
    if label.description:
        lines.append(f"  Description: {label.description}")
    if label.url:
        lines.append(f"  URL:         {label.url}")
    return lines


def _print_label(label: RemoteLabel) -> None:
    for line in _format_label(label):
        print(line)
    print()


def _confirm(prompt: str) -> bool:
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip().lower() == "y"


def _connect(store: GitHubLabelStore) -> bool:
    """Resolve the repository up front; report and return False if unreachable."""

    try:
        store.connect()
    except RemoteUnavailable as e:
        logger.error("Repository unavailable", extra={"repo": store.repository, "error": str(e)})
        print(f"Setup error: {e}", file=sys.stderr)
        return False
    return True


def _run_apply(
    args: argparse.Namespace, settings: LabelManagerSettings, store: GitHubLabelStore
) -> int:
    path = Path(args.file) if args.file else settings.config_file
    print(f"Reading config from: {path}")
    config = load_config(path)

    if not config.has_actions():
        print("No actions to perform. Config file is empty.")
        return 0

    if args.dry_run:
        print("=== DRY RUN MODE ===")
        print("No changes will be made.")
    elif not _connect(store):
        return 1
    print()

    outcomes = reconcile(
        config, store, dry_run=args.dry_run, skip_existing=args.skip_existing
    )
    summary = summarize(outcomes)
    for line in render_report(outcomes, summary, dry_run=args.dry_run):
        print(line)

    logger.info(
        "Label config applied",
        extra={
            "path": str(path),
            "dry_run": args.dry_run,
            "success": summary.success,
            "skipped": summary.skipped,
            "failed": summary.failed,
        },
    )
    return 1 if summary.has_failures else 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = LabelManagerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    repository = args.repository or settings.repository
    if not repository:
        print(
            "No target repository: pass --repo owner/repo or set LABELS_REPOSITORY",
            file=sys.stderr,
        )
        return 2

    store = _build_store(settings, repository)
    try:
        print(f"Repository: {store.repository}")

        # Local input checks run before the repository is contacted.
        color = None
        if args.command in ("create", "update") and args.color is not None:
            color = normalize_color(args.color)

        if args.command != "apply" and not _connect(store):
            return 1

        if args.command == "list":
            labels = store.list_labels()
            if not labels:
                print("No labels found.")
                return 0
            print(f"{len(labels)} Labels found:\n")
            for label in labels:
                _print_label(label)
            return 0

        if args.command == "get":
            _print_label(store.get_label(args.name))
            return 0

        if args.command == "create":
            label = store.create_label(args.name, color, args.description)
            print("Label created successfully")
            _print_label(label)
            return 0

        if args.command == "update":
            update = LabelUpdate(
                new_name=args.new_name, color=color, description=args.description
            )
            label = store.update_label(args.name, update)
            print("Label updated successfully")
            _print_label(label)
            return 0

        if args.command == "delete":
            if not args.force and not _confirm(
                f"Are you sure you want to delete '{args.name}' from {store.repository}? [y/N]: "
            ):
                print("Cancelled.")
                return 0
            store.delete_label(args.name)
            print(f"Label '{args.name}' deleted from {store.repository}")
            return 0

        if args.command == "apply":
            return _run_apply(args, settings, store)

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except (InvalidConfig, InvalidInput) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    except (NotFound, AlreadyExists) as e:
        logger.warning(str(e), extra={"label": e.name})
        print(f"Error: {e}", file=sys.stderr)
        return 3

    except LabelManagerError as e:
        logger.error("Command failed", extra={"error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except Exception:
        logger.exception("Command failed")
        return 1

    finally:
        store.close()


if __name__ == "__main__":
    raise SystemExit(main())
