"""
Bounded, linear undo/redo history of draft snapshots.

The history is a list of entries plus a cursor pointing at the entry that
represents the currently visible draft. Pushing after an undo prunes the
redo branch; there is no branching history.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from domain.models import WorkoutDraft

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 20


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class HistoryEntry:
    """An immutable snapshot of the draft at one point in time."""

    draft_snapshot: WorkoutDraft
    created_at: datetime = field(default_factory=_utcnow)


class HistoryManager:
    """
    Undo/redo log with a fixed maximum size.

    Snapshots are deep-copied on the way in and on the way out, so neither
    the caller's live draft nor a restored draft can alter a stored entry.

    Usage:
        >>> history = HistoryManager(initial=draft, max_entries=20)
        >>> history.push(edited)
        >>> history.undo()        # -> copy of draft
        >>> history.redo()        # -> copy of edited
    """

    def __init__(
        self,
        initial: Optional[WorkoutDraft] = None,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._entries: List[HistoryEntry] = []
        self._cursor = -1
        if initial is not None:
            self.push(initial)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return 0 <= self._cursor < len(self._entries) - 1

    def current(self) -> Optional[WorkoutDraft]:
        """Snapshot at the cursor, or None for an empty history."""
        if self._cursor < 0:
            return None
        return self._entries[self._cursor].draft_snapshot.snapshot()

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def push(self, draft: WorkoutDraft) -> None:
        """Record a new snapshot, pruning any redo branch first."""
        if self._cursor < len(self._entries) - 1:
            del self._entries[self._cursor + 1:]

        self._entries.append(HistoryEntry(draft_snapshot=draft.snapshot()))
        self._cursor = len(self._entries) - 1

        while len(self._entries) > self._max_entries:
            self._entries.pop(0)
            self._cursor -= 1

    def undo(self) -> Optional[WorkoutDraft]:
        """Step back one entry. Returns None when already at the oldest entry."""
        if not self.can_undo():
            return None
        self._cursor -= 1
        return self._entries[self._cursor].draft_snapshot.snapshot()

    def redo(self) -> Optional[WorkoutDraft]:
        """Step forward one entry. Returns None when already at the newest entry."""
        if not self.can_redo():
            return None
        self._cursor += 1
        return self._entries[self._cursor].draft_snapshot.snapshot()

    def clear(self, draft: Optional[WorkoutDraft] = None) -> None:
        """Drop all entries, optionally seeding a single new one."""
        self._entries.clear()
        self._cursor = -1
        if draft is not None:
            self.push(draft)
        logger.debug("History cleared (%d entries)", len(self._entries))
