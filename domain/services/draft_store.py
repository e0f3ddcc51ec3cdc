"""
Draft Store - single source of truth for the draft being edited.

Owns the current draft, the baseline it is compared against for unsaved
changes, the dirty flag, the last-saved timestamp and the undo/redo history.

Every change bumps ``version`` and is broadcast to subscribed listeners as a
``DraftChange``. Listeners (auto-save, change-triggered validation) react to
the change kind:
- "patch": an edit made through apply_patch
- "restore": undo/redo installed a snapshot from history
- "reset": the draft was reset to its baseline or re-initialized
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional

from pydantic import ValidationError

from domain.models import DocumentType, WorkoutDraft
from domain.services.history import DEFAULT_MAX_ENTRIES, HistoryManager

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 60

ChangeKind = Literal["patch", "restore", "reset"]

# Fields a patch may touch. document_type is accepted only when unchanged.
PATCHABLE_FIELDS = frozenset(WorkoutDraft.model_fields) - {"document_type"}


class DraftPatchError(ValueError):
    """Raised when a patch cannot be applied to the current draft."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields = fields or []


@dataclass(frozen=True)
class DraftChange:
    """Notification sent to listeners after every draft change."""

    kind: ChangeKind
    draft: WorkoutDraft
    version: int


DraftListener = Callable[[DraftChange], None]


class DraftStore:
    """
    Holds one editing session's draft and its dirty/save metadata.

    Usage:
        >>> store = DraftStore()
        >>> store.initialize(DocumentType.STRENGTH, {"name": "Lift"})
        >>> store.apply_patch({"location": "Weight room"})
        >>> store.has_unsaved_changes()
        True
        >>> store.undo()
        >>> store.has_unsaved_changes()
        False
    """

    def __init__(
        self,
        *,
        max_history: int = DEFAULT_MAX_ENTRIES,
        default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
    ) -> None:
        self._history = HistoryManager(max_entries=max_history)
        self._default_duration_minutes = default_duration_minutes
        self._draft: Optional[WorkoutDraft] = None
        self._baseline: Optional[WorkoutDraft] = None
        self._dirty = False
        self._last_saved_at: Optional[datetime] = None
        self._version = 0
        self._listeners: List[DraftListener] = []

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def draft(self) -> WorkoutDraft:
        """The current draft. Treat as read-only; change it via apply_patch."""
        if self._draft is None:
            raise RuntimeError("DraftStore has not been initialized")
        return self._draft

    @property
    def baseline(self) -> WorkoutDraft:
        if self._baseline is None:
            raise RuntimeError("DraftStore has not been initialized")
        return self._baseline

    @property
    def is_initialized(self) -> bool:
        return self._draft is not None

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def last_saved_at(self) -> Optional[datetime]:
        return self._last_saved_at

    @property
    def version(self) -> int:
        """Monotonic counter bumped on every change."""
        return self._version

    @property
    def history(self) -> HistoryManager:
        return self._history

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def subscribe(self, listener: DraftListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, kind: ChangeKind) -> None:
        change = DraftChange(kind=kind, draft=self.draft, version=self._version)
        for listener in list(self._listeners):
            listener(change)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def initialize(
        self,
        document_type: DocumentType,
        initial_patch: Optional[Mapping[str, Any]] = None,
    ) -> WorkoutDraft:
        """
        Build a fresh draft and make it the baseline.

        Required fields are defaulted (empty assignments, today's date, the
        configured duration, an empty payload) before the initial patch is
        merged in. Use the initial patch to pre-populate from a template or an
        existing record.

        Args:
            document_type: Workout variant, fixed for the session
            initial_patch: Optional fields to merge into the defaults

        Returns:
            The initialized draft

        Raises:
            DraftPatchError: If the initial patch is not valid for the variant
        """
        document_type = DocumentType(document_type)
        defaults: Dict[str, Any] = {
            "document_type": document_type,
            "date": date.today(),
            "duration_minutes": self._default_duration_minutes,
            "assigned_player_ids": set(),
            "assigned_team_ids": set(),
        }
        patch = self._check_patch(document_type, initial_patch or {})
        draft = self._build(document_type, {**defaults, **patch})

        self._draft = draft
        self._baseline = draft.snapshot()
        self._dirty = False
        self._history.clear(draft)
        self._version += 1
        logger.info(f"Draft initialized: {draft}")
        self._notify("reset")
        return draft

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def apply_patch(
        self, patch: Optional[Mapping[str, Any]] = None, **fields: Any
    ) -> WorkoutDraft:
        """
        Shallow-merge fields into the current draft and record it in history.

        Args:
            patch: Mapping of field name to new value
            **fields: Same, as keyword arguments

        Returns:
            The new current draft

        Raises:
            DraftPatchError: Unknown field, document type change, wrong-variant
                payload or a value the model rejects. The draft is unchanged.
        """
        current = self.draft
        changes = self._check_patch(current.document_type, {**(patch or {}), **fields})
        merged = current.model_dump()
        merged.update(changes)
        draft = self._build(current.document_type, merged)

        self._draft = draft
        self._dirty = True
        self._history.push(draft)
        self._version += 1
        logger.debug("Patched draft fields %s (version %d)", sorted(changes), self._version)
        self._notify("patch")
        return draft

    def replace_draft(self, draft: WorkoutDraft, *, kind: ChangeKind = "restore") -> None:
        """
        Install a full draft without appending to history.

        Used by undo/redo so restoring a snapshot is not itself recorded.
        """
        if draft.document_type != self.draft.document_type:
            raise DraftPatchError(
                "Cannot replace a draft with one of a different document type",
                ["document_type"],
            )
        self._draft = draft
        self._dirty = True
        self._version += 1
        self._notify(kind)

    def undo(self) -> Optional[WorkoutDraft]:
        """Restore the previous snapshot. No-op returning None at the oldest entry."""
        snapshot = self._history.undo()
        if snapshot is None:
            return None
        self.replace_draft(snapshot)
        return snapshot

    def redo(self) -> Optional[WorkoutDraft]:
        """Restore the next snapshot. No-op returning None at the newest entry."""
        snapshot = self._history.redo()
        if snapshot is None:
            return None
        self.replace_draft(snapshot)
        return snapshot

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    def reset_to_baseline(self) -> WorkoutDraft:
        """Discard all edits and collapse history to the baseline."""
        draft = self.baseline.snapshot()
        self._draft = draft
        self._dirty = False
        self._history.clear(draft)
        self._version += 1
        logger.info("Draft reset to baseline")
        self._notify("reset")
        return draft

    # -------------------------------------------------------------------------
    # Dirty / baseline bookkeeping
    # -------------------------------------------------------------------------

    def has_unsaved_changes(self) -> bool:
        """Structural inequality between the current draft and the baseline."""
        return self.draft != self.baseline

    def mark_dirty(self) -> None:
        self._dirty = True

    def mark_clean(self) -> None:
        self._dirty = False

    def mark_saved(
        self, snapshot: WorkoutDraft, saved_at: Optional[datetime] = None
    ) -> None:
        """
        Record a successful save of ``snapshot``.

        The snapshot becomes the baseline. Dirty is cleared only when the
        current draft still equals what was saved; edits made while the save
        was in flight stay dirty.
        """
        self._baseline = snapshot.snapshot()
        self._last_saved_at = saved_at or datetime.now(timezone.utc)
        if self.draft == snapshot:
            self._dirty = False

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_patch(
        document_type: DocumentType, patch: Mapping[str, Any]
    ) -> Dict[str, Any]:
        unknown = sorted(k for k in patch if k not in PATCHABLE_FIELDS and k != "document_type")
        if unknown:
            raise DraftPatchError(f"Unknown draft fields: {', '.join(unknown)}", unknown)

        changes = dict(patch)
        if "document_type" in changes:
            try:
                requested = DocumentType(changes.pop("document_type"))
            except ValueError as e:
                raise DraftPatchError("Invalid document type", ["document_type"]) from e
            if requested != document_type:
                raise DraftPatchError(
                    "The document type of a draft cannot be changed",
                    ["document_type"],
                )

        content = changes.get("content")
        if isinstance(content, Mapping) and "document_type" not in content:
            changes["content"] = {**content, "document_type": document_type.value}
        return changes

    @staticmethod
    def _build(document_type: DocumentType, data: Dict[str, Any]) -> WorkoutDraft:
        try:
            return WorkoutDraft.model_validate({**data, "document_type": document_type})
        except ValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            raise DraftPatchError(f"Invalid draft patch: {e.error_count()} errors", fields) from e
