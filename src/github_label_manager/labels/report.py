"""Summaries and plain-text rendering of reconciliation outcomes."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from github_label_manager.labels.outcomes import Outcome, OutcomeAction

DRY_RUN_NOTICE = "This was a dry run. No actual changes were made."


@dataclass(frozen=True, slots=True)
class Summary:
    success: int
    skipped: int
    failed: int

    @property
    def has_failures(self) -> bool:
        return self.failed > 0


def summarize(outcomes: Sequence[Outcome]) -> Summary:
    """Count outcomes. Auxiliary rename-candidate records are not counted."""

    success = skipped = failed = 0
    for outcome in outcomes:
        if outcome.auxiliary:
            continue
        if outcome.ok:
            success += 1
        elif outcome.action is OutcomeAction.SKIPPED:
            skipped += 1
        else:
            failed += 1
    return Summary(success=success, skipped=skipped, failed=failed)


def format_outcome(outcome: Outcome) -> str:
    if outcome.source is not None:
        subject = f"'{outcome.source}' -> '{outcome.subject}'"
    else:
        subject = f"'{outcome.subject}'"
    line = f"  {outcome.action.value.upper():<8} {subject}"
    if outcome.detail:
        line += f": {outcome.detail}"
    return line


def render_report(
    outcomes: Sequence[Outcome], summary: Summary, *, dry_run: bool = False
) -> list[str]:
    lines = [format_outcome(o) for o in outcomes]
    lines.append("")
    lines.append("=== Summary ===")
    lines.append(f"  Success: {summary.success}")
    if summary.skipped:
        lines.append(f"  Skipped: {summary.skipped}")
    if summary.failed:
        lines.append(f"  Failed: {summary.failed}")
    if dry_run:
        lines.append("")
        lines.append(DRY_RUN_NOTICE)
    return lines
