"""Reconcile a remote label set with a declarative `LabelConfig`.

Every declaration is classified once into exactly one branch:

- `RenameSearch`: `update_if_match` names existing labels to fold into this one
- `CreateOrResolve`: a colour is given, so the label is created; a name conflict
  is resolved by the `update_if_exists` / `skip_if_exists` policy
- `UpdateOnly`: no colour, so the label must already exist and is edited

Declarations are processed in document order, then deletions in document order.
Calls are issued one at a time and per-item failures are recorded as outcomes
rather than raised, so the full list is always drained.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from github_label_manager.errors import AlreadyExists, InvalidInput, LabelManagerError, NotFound
from github_label_manager.labels.colors import normalize_color
from github_label_manager.labels.config import LabelConfig, LabelDeclaration
from github_label_manager.labels.outcomes import Outcome, OutcomeAction
from github_label_manager.labels.store import LabelStore, LabelUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RenameSearch:
    declaration: LabelDeclaration


@dataclass(frozen=True, slots=True)
class CreateOrResolve:
    declaration: LabelDeclaration
    color: str


@dataclass(frozen=True, slots=True)
class UpdateOnly:
    declaration: LabelDeclaration


Decision = RenameSearch | CreateOrResolve | UpdateOnly


def plan_declaration(declaration: LabelDeclaration) -> Decision:
    """Pick the single branch that handles `declaration`."""

    if declaration.rename_from:
        return RenameSearch(declaration)
    if declaration.color is not None:
        return CreateOrResolve(declaration, declaration.color)
    return UpdateOnly(declaration)


class Reconciler:
    """Single-pass reconciliation against one store.

    In dry-run mode the store is never called; each item records the action its
    branch would take on the success path.
    """

    def __init__(
        self,
        store: LabelStore,
        *,
        dry_run: bool = False,
        skip_existing: bool = False,
    ) -> None:
        self._store = store
        self._dry_run = dry_run
        self._skip_existing = skip_existing
        self._outcomes: list[Outcome] = []

    def run(self, config: LabelConfig) -> list[Outcome]:
        for declaration in config.labels:
            decision = plan_declaration(declaration)
            if isinstance(decision, RenameSearch):
                self._rename_search(declaration)
            elif isinstance(decision, CreateOrResolve):
                self._create_or_resolve(declaration, decision.color)
            else:
                self._update_only(declaration)

        for name in config.delete:
            self._delete(name)

        return list(self._outcomes)

    def _record(
        self,
        action: OutcomeAction,
        subject: str,
        *,
        detail: str | None = None,
        source: str | None = None,
        auxiliary: bool = False,
    ) -> None:
        outcome = Outcome(
            action=action, subject=subject, detail=detail, source=source, auxiliary=auxiliary
        )
        self._outcomes.append(outcome)
        log = logger.warning if action is OutcomeAction.FAILED else logger.info
        log(
            "Label %s",
            action.value,
            extra={
                "label": subject,
                "source": source,
                "detail": detail,
                "dry_run": self._dry_run,
            },
        )

    def _color_or_fail(self, color: str, declaration: LabelDeclaration) -> str | None:
        """Return the normalised colour, or record a failure and return None."""

        try:
            return normalize_color(color)
        except InvalidInput as e:
            self._record(OutcomeAction.FAILED, declaration.name, detail=str(e))
            return None

    def _rename_search(self, declaration: LabelDeclaration) -> None:
        color = None
        if declaration.color is not None:
            color = self._color_or_fail(declaration.color, declaration)
            if color is None:
                return

        if self._dry_run:
            for candidate in declaration.rename_from:
                self._record(OutcomeAction.RENAMED, declaration.name, source=candidate)
            return

        update = LabelUpdate(
            new_name=declaration.name, color=color, description=declaration.description
        )
        found_any = False
        for candidate in declaration.rename_from:
            try:
                self._store.update_label(candidate, update)
            except NotFound:
                self._record(
                    OutcomeAction.SKIPPED,
                    declaration.name,
                    detail=f"{candidate!r} not found",
                    source=candidate,
                    auxiliary=True,
                )
                continue
            except LabelManagerError as e:
                self._record(
                    OutcomeAction.FAILED, declaration.name, detail=str(e), source=candidate
                )
                continue
            found_any = True
            self._record(OutcomeAction.RENAMED, declaration.name, source=candidate)

        if found_any:
            return

        if color is None:
            self._record(
                OutcomeAction.SKIPPED,
                declaration.name,
                detail="no update_if_match label found and no color to create it",
            )
            return

        try:
            self._store.create_label(declaration.name, color, declaration.description)
        except LabelManagerError as e:
            self._record(OutcomeAction.FAILED, declaration.name, detail=str(e))
            return
        self._record(OutcomeAction.CREATED, declaration.name)

    def _create_or_resolve(self, declaration: LabelDeclaration, raw_color: str) -> None:
        color = self._color_or_fail(raw_color, declaration)
        if color is None:
            return

        if self._dry_run:
            self._record(OutcomeAction.CREATED, declaration.name)
            return

        try:
            self._store.create_label(declaration.name, color, declaration.description)
        except AlreadyExists as conflict:
            self._resolve_conflict(declaration, color, conflict)
            return
        except LabelManagerError as e:
            self._record(OutcomeAction.FAILED, declaration.name, detail=str(e))
            return
        self._record(OutcomeAction.CREATED, declaration.name)

    def _resolve_conflict(
        self, declaration: LabelDeclaration, color: str, conflict: AlreadyExists
    ) -> None:
        # update_if_exists wins over skip_if_exists.
        if declaration.update_if_exists:
            update = LabelUpdate(color=color, description=declaration.description)
            try:
                self._store.update_label(declaration.name, update)
            except LabelManagerError as e:
                self._record(OutcomeAction.FAILED, declaration.name, detail=str(e))
                return
            self._record(OutcomeAction.UPDATED, declaration.name, detail="already existed")
            return

        if declaration.skip_if_exists or self._skip_existing:
            self._record(OutcomeAction.SKIPPED, declaration.name, detail="already exists")
            return

        self._record(OutcomeAction.FAILED, declaration.name, detail=str(conflict))

    def _update_only(self, declaration: LabelDeclaration) -> None:
        if self._dry_run:
            self._record(OutcomeAction.UPDATED, declaration.name)
            return

        try:
            self._store.update_label(
                declaration.name, LabelUpdate(description=declaration.description)
            )
        except LabelManagerError as e:
            self._record(OutcomeAction.FAILED, declaration.name, detail=str(e))
            return
        self._record(OutcomeAction.UPDATED, declaration.name)

    def _delete(self, name: str) -> None:
        if self._dry_run:
            self._record(OutcomeAction.DELETED, name)
            return

        try:
            self._store.delete_label(name)
        except LabelManagerError as e:
            self._record(OutcomeAction.FAILED, name, detail=str(e))
            return
        self._record(OutcomeAction.DELETED, name)


def reconcile(
    config: LabelConfig,
    store: LabelStore,
    *,
    dry_run: bool = False,
    skip_existing: bool = False,
) -> list[Outcome]:
    """Bring `store` toward `config` and return one outcome per action, in order.

    `skip_existing` applies `skip_if_exists` to every declaration.
    """

    return Reconciler(store, dry_run=dry_run, skip_existing=skip_existing).run(config)
