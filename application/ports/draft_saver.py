"""
Draft Persistence Interface (Port).

The engine never talks to a database or network directly; it hands the
draft to a saver supplied by the host application.
"""
from typing import Protocol

from domain.models import WorkoutDraft


class DraftSaver(Protocol):
    """
    Abstract interface for persisting a draft.

    Implementations signal failure by raising. Any exception is treated as a
    failed save: the session's status becomes ``error`` and the draft stays
    dirty so the save can be retried.
    """

    async def save(self, draft: WorkoutDraft) -> None:
        """
        Persist the draft.

        Args:
            draft: Independent snapshot of the draft to store

        Raises:
            Exception: Any failure to persist
        """
        ...
