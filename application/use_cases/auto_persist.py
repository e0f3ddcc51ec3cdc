"""
Auto-Persist Scheduler.

Saves the draft in the background after a quiet period, without racing
manual saves or outliving the editing session.

Workflow:
1. Every "patch" change from the Draft Store restarts the debounce timer
2. "restore"/"reset" changes (undo, redo, reset) cancel it
3. When the timer fires and the draft is dirty with unsaved changes, the
   draft is handed to the DraftSaver under the session's save gate
4. Success updates the store's baseline; failure leaves dirty state intact

All persistence for a session (automatic or manual) goes through one
``asyncio.Lock`` so at most one save is in flight at a time.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from application.ports import DraftSaver, Timer, TimerHandle
from domain.models import SaveStatus, WorkoutDraft
from domain.services import DraftChange, DraftStore

logger = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 3000
DEFAULT_SAVED_RESET_MS = 2000


class DraftPersistenceError(Exception):
    """Raised by a manual save when the DraftSaver fails."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AutoPersistScheduler:
    """
    Debounced background persistence for one Draft Store.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> scheduler = AutoPersistScheduler(store, saver, AsyncioTimer(), delay_ms=3000)
        >>> store.apply_patch(name="Tuesday")   # timer starts
        >>> store.apply_patch(name="Tuesday AM")  # timer restarts
        >>> # ...3s of quiet later, saver.save() is called once
        >>> scheduler.close()
    """

    def __init__(
        self,
        store: DraftStore,
        saver: DraftSaver,
        timer: Timer,
        *,
        save_gate: Optional[asyncio.Lock] = None,
        delay_ms: int = DEFAULT_DELAY_MS,
        enabled: bool = True,
        saved_reset_ms: int = DEFAULT_SAVED_RESET_MS,
        on_status_change: Optional[Callable[[SaveStatus], None]] = None,
    ) -> None:
        if delay_ms <= 0:
            raise ValueError("delay_ms must be positive")
        self._store = store
        self._saver = saver
        self._timer = timer
        self._gate = save_gate or asyncio.Lock()
        self._delay_ms = delay_ms
        self._enabled = enabled
        self._saved_reset_ms = saved_reset_ms
        self._on_status_change = on_status_change

        self._status = SaveStatus.IDLE
        self._pending: Optional[TimerHandle] = None
        self._reset_handle: Optional[TimerHandle] = None
        self._task: Optional[asyncio.Task] = None
        self._saved_version: Optional[int] = None
        self._save_count = 0
        self._last_error: Optional[BaseException] = None
        self._closed = False

        self._unsubscribe = store.subscribe(self._on_change)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def status(self) -> SaveStatus:
        return self._status

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def has_pending(self) -> bool:
        """True while a debounce timer is scheduled."""
        return self._pending is not None

    @property
    def is_saving(self) -> bool:
        return self._gate.locked()

    @property
    def save_count(self) -> int:
        """Number of successful saves (automatic and manual)."""
        return self._save_count

    @property
    def last_error(self) -> Optional[BaseException]:
        return self._last_error

    # -------------------------------------------------------------------------
    # Control
    # -------------------------------------------------------------------------

    def enable(self) -> None:
        """Turn auto-save on; unsaved edits start a fresh debounce cycle."""
        if self._closed or self._enabled:
            return
        self._enabled = True
        if self._should_save():
            self._restart()

    def disable(self) -> None:
        """Turn auto-save off and cancel any pending timer."""
        self._enabled = False
        self.cancel_pending()

    def cancel_pending(self) -> None:
        """Cancel the debounce timer, if one is scheduled."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
            logger.debug("Pending auto-save cancelled")

    def close(self) -> None:
        """Tear down: cancel timers and stop observing the store."""
        if self._closed:
            return
        self._closed = True
        self.cancel_pending()
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None
        self._unsubscribe()

    async def wait_idle(self) -> None:
        """Wait for an in-flight auto-save to finish."""
        task = self._task
        if task is not None and not task.done():
            await task

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    async def persist_now(
        self,
        draft: Optional[WorkoutDraft] = None,
        version: Optional[int] = None,
    ) -> Optional[datetime]:
        """
        Save immediately, serialized with any in-flight save.

        Used for manual saves. The pending debounce timer is cancelled first.
        If the save being waited on already persisted this draft version, no
        second write is made.

        Args:
            draft: Snapshot to persist (defaults to the current draft)
            version: Store version of that snapshot

        Returns:
            Time of the save that persisted the draft

        Raises:
            DraftPersistenceError: If the DraftSaver fails
        """
        self.cancel_pending()
        async with self._gate:
            if draft is None:
                draft, version = self._store.draft.snapshot(), self._store.version
            if version is not None and version == self._saved_version:
                logger.info("Draft version %d already saved, skipping write", version)
                return self._store.last_saved_at
            if not await self._persist_locked(draft, version):
                raise DraftPersistenceError(
                    f"Failed to save draft: {self._last_error}"
                ) from self._last_error
            return self._store.last_saved_at

    def _should_save(self) -> bool:
        return (
            self._enabled
            and not self._closed
            and self._store.is_dirty
            and self._store.has_unsaved_changes()
        )

    async def _autosave(self) -> None:
        async with self._gate:
            if not self._should_save():
                return
            await self._persist_locked(self._store.draft.snapshot(), self._store.version)

    async def _persist_locked(self, draft: WorkoutDraft, version: Optional[int]) -> bool:
        """Run one save. Caller holds the gate. Returns True on success."""
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None
        self._set_status(SaveStatus.SAVING)

        try:
            await self._saver.save(draft)
        except Exception as e:
            self._last_error = e
            logger.exception(f"Draft save failed: {e}")
            self._set_status(SaveStatus.ERROR)
            return False

        self._store.mark_saved(draft, datetime.now(timezone.utc))
        self._saved_version = version
        self._save_count += 1
        self._last_error = None
        logger.info(f"Draft saved: {draft}")
        self._set_status(SaveStatus.SAVED)
        if not self._closed:
            self._reset_handle = self._timer.call_later(
                self._saved_reset_ms / 1000, self._reset_status
            )

        # Edits made while the save was in flight get their own cycle
        if self._should_save():
            self._restart()
        else:
            self.cancel_pending()
        return True

    # -------------------------------------------------------------------------
    # Timer plumbing
    # -------------------------------------------------------------------------

    def _on_change(self, change: DraftChange) -> None:
        if change.kind == "patch":
            if self._enabled and not self._closed:
                self._restart()
        else:
            self.cancel_pending()

    def _restart(self) -> None:
        self.cancel_pending()
        self._pending = self._timer.call_later(self._delay_ms / 1000, self._on_timer)

    def _on_timer(self) -> None:
        self._pending = None
        if not self._should_save():
            return
        if self._gate.locked():
            logger.debug("Save already in flight, skipping auto-save")
            return
        self._task = asyncio.ensure_future(self._autosave())
        self._task.add_done_callback(self._log_task_error)

    def _log_task_error(self, task: "asyncio.Future[None]") -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Auto-save task failed", exc_info=error)

    def _reset_status(self) -> None:
        self._reset_handle = None
        if self._status == SaveStatus.SAVED:
            self._set_status(SaveStatus.IDLE)

    def _set_status(self, status: SaveStatus) -> None:
        if status == self._status:
            return
        self._status = status
        if self._on_status_change is not None:
            self._on_status_change(status)
