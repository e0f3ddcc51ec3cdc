"""
Application Use Cases for the workout draft engine.

This package contains the application-level orchestration of an editing
session. Use cases coordinate domain services with the injected ports
(DraftSaver, MedicalLookup, Timer).

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and ports
- Dependencies are injected via constructors for testability

Usage:
    from application.use_cases import DraftSession, DraftValidationError

    session = DraftSession(DocumentType.AGILITY, saver=saver, teams=teams)
    session.apply_patch(name="Cone drills")
    session.add_team("team-a")
    try:
        await session.save()
    except DraftValidationError as e:
        show(e.errors)
"""

from application.use_cases.auto_persist import (
    AutoPersistScheduler,
    DraftPersistenceError,
)
from application.use_cases.draft_session import (
    DraftSession,
    DraftValidationError,
    SaveDraftResult,
    SessionClosedError,
)

__all__ = [
    # Auto-save
    "AutoPersistScheduler",
    "DraftPersistenceError",
    # Session
    "DraftSession",
    "DraftValidationError",
    "SaveDraftResult",
    "SessionClosedError",
]
