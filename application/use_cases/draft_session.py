"""
DraftSession Use Case.

Orchestrates one workout editing session: the Draft Store, undo/redo
history, assignment helpers, change-triggered validation, auto-save and the
manual save/cancel workflow.

Sessions are driven from a running asyncio event loop. Every mutation is a
direct method call; background work (validation, auto-save) is scheduled
explicitly and cancelled on teardown.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional, Sequence, Set

from application.ports import DraftSaver, MedicalLookup, Timer
from application.use_cases.auto_persist import AutoPersistScheduler
from backend.settings import Settings, get_settings
from domain.models import (
    DocumentType,
    PlayerRef,
    SaveStatus,
    TeamRef,
    ValidationIssue,
    ValidationResult,
    WorkoutDraft,
)
from domain.services import AssignmentHelpers, DraftChange, DraftStore, get_template
from domain.validation import ValidationEngine
from infrastructure.timers import AsyncioTimer

logger = logging.getLogger(__name__)


class DraftValidationError(Exception):
    """Raised when a save is attempted on a draft with validation errors."""

    def __init__(self, message: str, result: ValidationResult):
        super().__init__(message)
        self.message = message
        self.result = result
        self.errors: List[ValidationIssue] = list(result.errors)


class SessionClosedError(RuntimeError):
    """Raised when a closed session is edited or saved."""


@dataclass
class SaveDraftResult:
    """Result of a manual save."""

    success: bool
    draft: Optional[WorkoutDraft] = None
    saved_at: Optional[datetime] = None
    warnings: List[ValidationIssue] = field(default_factory=list)


class DraftSession:
    """
    One editing session for one workout draft.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> session = DraftSession(
        ...     DocumentType.CONDITIONING,
        ...     saver=api_saver,
        ...     players=roster.players,
        ...     teams=roster.teams,
        ...     medical_lookup=medical_client.lookup,
        ... )
        >>> session.apply_patch(name="Bike Intervals")
        >>> session.add_team("team-u18")
        >>> session.undo()
        >>> result = await session.save()
        >>> session.close()
    """

    def __init__(
        self,
        document_type: DocumentType,
        saver: DraftSaver,
        *,
        initial_patch: Optional[Mapping[str, Any]] = None,
        players: Sequence[PlayerRef] = (),
        teams: Sequence[TeamRef] = (),
        medical_lookup: Optional[MedicalLookup] = None,
        timer: Optional[Timer] = None,
        settings: Optional[Settings] = None,
        on_cancel: Optional[Callable[[], None]] = None,
        on_status_change: Optional[Callable[[SaveStatus], None]] = None,
        validate_on_change: Optional[bool] = None,
    ) -> None:
        settings = settings or get_settings()
        self._players = list(players)
        self._teams = list(teams)
        self._medical_lookup = medical_lookup
        self._on_cancel = on_cancel
        self._validate_on_change = (
            settings.validate_on_change if validate_on_change is None else validate_on_change
        )

        self._store = DraftStore(
            max_history=settings.history_max_entries,
            default_duration_minutes=settings.default_duration_minutes,
        )
        self._store.initialize(document_type, initial_patch)
        self._assignments = AssignmentHelpers(self._store)
        self._engine = ValidationEngine(settings.to_rule_config())
        self._scheduler = AutoPersistScheduler(
            self._store,
            saver,
            timer or AsyncioTimer(),
            delay_ms=settings.autosave_delay_ms,
            enabled=settings.autosave_enabled,
            saved_reset_ms=settings.saved_status_reset_ms,
            on_status_change=on_status_change,
        )

        self._validation: Optional[ValidationResult] = None
        self._validation_tasks: Set[asyncio.Task] = set()
        self._closed = False
        self._unsubscribe = self._store.subscribe(self._on_change)

        logger.info(f"Editing session opened for {self._store.draft}")

    @classmethod
    def from_template(
        cls,
        template_id: str,
        saver: DraftSaver,
        *,
        initial_patch: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> "DraftSession":
        """
        Open a session pre-populated from a built-in template.

        Args:
            template_id: Registered template id
            saver: Persistence collaborator
            initial_patch: Extra fields merged over the template
            **kwargs: Forwarded to the constructor

        Raises:
            TemplateNotFoundError: If the template id is unknown
        """
        template = get_template(template_id)
        patch = {**template.to_patch(), **(initial_patch or {})}
        return cls(template.document_type, saver, initial_patch=patch, **kwargs)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def draft(self) -> WorkoutDraft:
        return self._store.draft

    @property
    def store(self) -> DraftStore:
        return self._store

    @property
    def scheduler(self) -> AutoPersistScheduler:
        return self._scheduler

    @property
    def status(self) -> SaveStatus:
        return self._scheduler.status

    @property
    def is_dirty(self) -> bool:
        return self._store.is_dirty

    @property
    def last_saved_at(self) -> Optional[datetime]:
        return self._store.last_saved_at

    @property
    def validation(self) -> Optional[ValidationResult]:
        """Latest validation result, never older than one already seen."""
        return self._validation

    @property
    def auto_save_enabled(self) -> bool:
        return self._scheduler.enabled

    @property
    def is_closed(self) -> bool:
        return self._closed

    def has_unsaved_changes(self) -> bool:
        return self._store.has_unsaved_changes()

    def can_undo(self) -> bool:
        return self._store.can_undo()

    def can_redo(self) -> bool:
        return self._store.can_redo()

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def apply_patch(
        self, patch: Optional[Mapping[str, Any]] = None, **fields: Any
    ) -> WorkoutDraft:
        self._ensure_open()
        return self._store.apply_patch(patch, **fields)

    def undo(self) -> Optional[WorkoutDraft]:
        """Step back in history. Cancels a pending auto-save."""
        self._ensure_open()
        return self._store.undo()

    def redo(self) -> Optional[WorkoutDraft]:
        """Step forward in history. Cancels a pending auto-save."""
        self._ensure_open()
        return self._store.redo()

    def reset_to_baseline(self) -> WorkoutDraft:
        self._ensure_open()
        return self._store.reset_to_baseline()

    def add_player(self, player_id: str) -> Optional[WorkoutDraft]:
        self._ensure_open()
        return self._assignments.add_player(player_id)

    def remove_player(self, player_id: str) -> Optional[WorkoutDraft]:
        self._ensure_open()
        return self._assignments.remove_player(player_id)

    def add_team(self, team_id: str) -> Optional[WorkoutDraft]:
        self._ensure_open()
        return self._assignments.add_team(team_id)

    def remove_team(self, team_id: str) -> Optional[WorkoutDraft]:
        self._ensure_open()
        return self._assignments.remove_team(team_id)

    def enable_auto_save(self) -> None:
        self._scheduler.enable()

    def disable_auto_save(self) -> None:
        self._scheduler.disable()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    async def validate(self) -> ValidationResult:
        """Validate the current draft now, including medical compliance."""
        return await self._run_validation(self._store.draft, self._store.version)

    async def wait_for_validation(self) -> None:
        """Wait until all change-triggered validations have completed."""
        while self._validation_tasks:
            await asyncio.gather(*list(self._validation_tasks))

    async def _run_validation(self, draft: WorkoutDraft, version: int) -> ValidationResult:
        result = await self._engine.validate(
            draft,
            self._players,
            self._teams,
            self._medical_lookup,
            version=version,
        )
        self._apply_validation(result)
        return result

    def _apply_validation(self, result: ValidationResult) -> None:
        current = self._validation
        if current is not None and result.draft_version < current.draft_version:
            logger.debug(
                "Dropping stale validation for version %d (have %d)",
                result.draft_version,
                current.draft_version,
            )
            return
        self._validation = result

    def _on_change(self, change: DraftChange) -> None:
        if not self._validate_on_change or self._closed:
            return
        task = asyncio.get_running_loop().create_task(
            self._run_validation(change.draft, change.version)
        )
        self._validation_tasks.add(task)
        task.add_done_callback(self._validation_tasks.discard)

    # -------------------------------------------------------------------------
    # Save / cancel / teardown
    # -------------------------------------------------------------------------

    async def save(self) -> SaveDraftResult:
        """
        Validate and persist the current draft.

        Workflow:
        1. Cancel any pending auto-save
        2. Validate the current draft (errors block, warnings do not)
        3. Persist under the save gate, after any in-flight save

        Returns:
            SaveDraftResult with the saved snapshot and any warnings

        Raises:
            DraftValidationError: If the draft has validation errors
            DraftPersistenceError: If the DraftSaver fails
            SessionClosedError: If the session was closed
        """
        self._ensure_open()
        self._scheduler.cancel_pending()

        draft, version = self._store.draft.snapshot(), self._store.version
        result = await self._run_validation(draft, version)
        if not result.is_valid:
            logger.warning(
                f"Save blocked by validation errors: {[str(e) for e in result.errors]}"
            )
            raise DraftValidationError("Workout validation failed", result)

        saved_at = await self._scheduler.persist_now(draft, version)
        return SaveDraftResult(
            success=True,
            draft=draft,
            saved_at=saved_at,
            warnings=list(result.warnings),
        )

    def cancel(self, confirm: Optional[Callable[[], bool]] = None) -> bool:
        """
        End the session without saving.

        When there are unsaved changes and ``confirm`` is given, it is asked
        first; a False answer keeps the session open.

        Returns:
            True if the session was torn down
        """
        if self._closed:
            return True
        if confirm is not None and self.has_unsaved_changes() and not confirm():
            logger.info("Cancel declined; session kept open")
            return False

        self.close()
        if self._on_cancel is not None:
            self._on_cancel()
        logger.info("Editing session cancelled")
        return True

    def close(self) -> None:
        """Tear down: cancel timers and background validation."""
        if self._closed:
            return
        self._closed = True
        self._scheduler.close()
        self._unsubscribe()
        for task in list(self._validation_tasks):
            task.cancel()
        self._validation_tasks.clear()

    def _ensure_open(self) -> None:
        """
        Check the session can take an edit, before anything is changed.

        Raises:
            SessionClosedError: If the session was closed
            RuntimeError: If no event loop is running; change listeners
                schedule timers and validation tasks on it
        """
        if self._closed:
            raise SessionClosedError("Editing session is closed")
        asyncio.get_running_loop()
