"""
Fake Port Implementations for Testing.

This package provides in-memory fake implementations of the engine's ports
for fast, isolated testing. No event-loop timers, network or database.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- FakeTimer is driven manually with advance()
- FakeDraftSaver records saves and can fail or pause on demand

Usage:
    from tests.fakes import FakeTimer, FakeDraftSaver, FakeMedicalLookup

    timer = FakeTimer()
    saver = FakeDraftSaver()
    session = DraftSession(DocumentType.STRENGTH, saver, timer=timer)
"""

from tests.fakes.draft_saver import FakeDraftSaver
from tests.fakes.medical_lookup import FakeMedicalLookup
from tests.fakes.timer import FakeTimer, FakeTimerHandle

__all__ = [
    "FakeDraftSaver",
    "FakeMedicalLookup",
    "FakeTimer",
    "FakeTimerHandle",
]
