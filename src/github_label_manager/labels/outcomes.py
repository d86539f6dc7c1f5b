"""Per-action reconciliation outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class OutcomeAction(StrEnum):
    RENAMED = "renamed"
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    DELETED = "deleted"
    FAILED = "failed"


SUCCESS_ACTIONS: frozenset[OutcomeAction] = frozenset(
    {
        OutcomeAction.RENAMED,
        OutcomeAction.CREATED,
        OutcomeAction.UPDATED,
        OutcomeAction.DELETED,
    }
)


@dataclass(frozen=True, slots=True)
class Outcome:
    """What happened to one declaration, rename candidate or deletion.

    `auxiliary` marks rename candidates that were not found remotely. They are
    reported but not counted.
    """

    action: OutcomeAction
    subject: str
    detail: str | None = None
    source: str | None = None
    auxiliary: bool = False

    @property
    def ok(self) -> bool:
        return self.action in SUCCESS_ACTIONS
