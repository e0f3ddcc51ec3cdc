"""
Pytest fixtures for workout draft engine tests.
"""

from datetime import date
from typing import List

import pytest

from backend.settings import Settings
from domain.models import (
    AgilityContent,
    ConditioningContent,
    DocumentType,
    Drill,
    Exercise,
    HybridBlock,
    HybridContent,
    Interval,
    PlayerRef,
    StrengthContent,
    TeamRef,
    WorkoutDraft,
)
from tests.fakes import FakeDraftSaver, FakeMedicalLookup, FakeTimer


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Settings:
    """Settings with defaults, isolated from any .env file."""
    return Settings(_env_file=None, environment="test")


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_timer() -> FakeTimer:
    return FakeTimer()


@pytest.fixture
def fake_saver() -> FakeDraftSaver:
    return FakeDraftSaver()


@pytest.fixture
def fake_medical_lookup() -> FakeMedicalLookup:
    return FakeMedicalLookup()


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


@pytest.fixture
def players() -> List[PlayerRef]:
    return [
        PlayerRef(id="p1", name="Alex Morgan"),
        PlayerRef(id="p2", name="Sam Lee"),
        PlayerRef(id="p3", name="Jordan Diaz"),
    ]


@pytest.fixture
def teams() -> List[TeamRef]:
    return [
        TeamRef(id="t1", name="U18", player_ids=["p2", "p3"]),
        TeamRef(id="t2", name="Senior", player_ids=[]),
    ]


# ---------------------------------------------------------------------------
# Drafts
# ---------------------------------------------------------------------------


@pytest.fixture
def strength_draft() -> WorkoutDraft:
    """A complete, valid strength draft."""
    return WorkoutDraft(
        name="Monday Lift",
        document_type=DocumentType.STRENGTH,
        date=date(2026, 3, 2),
        assigned_player_ids={"p1"},
        content=StrengthContent(
            exercises=[
                Exercise(name="Back Squat", sets=5, reps=5, rest_seconds=180),
                Exercise(name="Bench Press", sets=5, reps=5, rest_seconds=180),
            ]
        ),
    )


@pytest.fixture
def conditioning_draft() -> WorkoutDraft:
    """A complete, valid conditioning draft."""
    return WorkoutDraft(
        name="Bike Intervals",
        document_type=DocumentType.CONDITIONING,
        date=date(2026, 3, 3),
        assigned_team_ids={"t1"},
        content=ConditioningContent(
            equipment="bike",
            intervals=[
                Interval(name="Work", duration_seconds=30, rest_seconds=90, target_heart_rate=150),
                Interval(name="Work", duration_seconds=30, rest_seconds=90, target_heart_rate=150),
            ],
        ),
    )


@pytest.fixture
def agility_draft() -> WorkoutDraft:
    return WorkoutDraft(
        name="Cone Work",
        document_type=DocumentType.AGILITY,
        date=date(2026, 3, 4),
        assigned_player_ids={"p1", "p2"},
        content=AgilityContent(drills=[Drill(name="T-Drill", reps=4)]),
    )


@pytest.fixture
def hybrid_draft() -> WorkoutDraft:
    return WorkoutDraft(
        name="Circuit",
        document_type=DocumentType.HYBRID,
        date=date(2026, 3, 5),
        assigned_player_ids={"p3"},
        content=HybridContent(
            blocks=[
                HybridBlock(kind="exercise", exercises=[Exercise(name="Push-up", sets=3, reps=10)]),
                HybridBlock(kind="interval", interval=Interval(duration_seconds=60, rest_seconds=30)),
            ]
        ),
    )
