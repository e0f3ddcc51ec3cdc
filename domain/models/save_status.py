"""Persistence status of an editing session."""

from enum import Enum


class SaveStatus(str, Enum):
    """
    Save lifecycle of one editing session.

    IDLE -> SAVING -> SAVED -> (after a short delay) IDLE
                   -> ERROR (dirty state kept so the save can be retried)
    """

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"
