"""
Domain layer for the workout draft engine.

This package contains the draft data model, the in-memory editing services
(history, draft store, assignment helpers, templates) and the validation
pipeline. Nothing here knows about timers, persistence or transport.
"""

from domain.models import (
    DocumentType,
    SaveStatus,
    ValidationCode,
    ValidationIssue,
    ValidationResult,
    WorkoutDraft,
)

__all__ = [
    "DocumentType",
    "SaveStatus",
    "ValidationCode",
    "ValidationIssue",
    "ValidationResult",
    "WorkoutDraft",
]
