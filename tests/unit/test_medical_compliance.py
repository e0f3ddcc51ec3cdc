"""
Unit tests for the medical compliance stage.

These tests verify:
- Affected players include members of assigned teams
- Restriction matching produces warnings, never errors
- Lookup failures degrade to a single MEDICAL_CHECK_FAILED warning
"""

import pytest

from domain.models import (
    ConditioningContent,
    Interval,
    MedicalRecord,
    MedicalRestriction,
    PlayerStatus,
    RestrictionCategory,
    ValidationCode,
)
from domain.validation import (
    MedicalComplianceChecker,
    ValidationEngine,
    affected_player_ids,
    find_conflicts,
)
from tests.fakes import FakeMedicalLookup


def _restricted(player_id, category, value, max_heart_rate=None, status=PlayerStatus.INJURED):
    return MedicalRecord(
        player_id=player_id,
        status=status,
        restrictions=[
            MedicalRestriction(category=category, value=value, max_heart_rate=max_heart_rate)
        ],
    )


# =============================================================================
# Helpers
# =============================================================================


@pytest.mark.unit
class TestAffectedPlayers:
    """Tests for affected_player_ids."""

    def test_players_and_team_members(self, conditioning_draft, teams):
        draft = conditioning_draft.model_copy(update={"assigned_player_ids": {"p1"}})
        assert affected_player_ids(draft, teams) == ["p1", "p2", "p3"]

    def test_unknown_team_contributes_nobody(self, conditioning_draft):
        assert affected_player_ids(conditioning_draft, []) == []

    def test_unassigned_teams_ignored(self, strength_draft, teams):
        assert affected_player_ids(strength_draft, teams) == ["p1"]


@pytest.mark.unit
class TestFindConflicts:
    """Tests for restriction matching."""

    def test_body_part_substring(self, strength_draft):
        record = _restricted("p1", RestrictionCategory.BODY_PART, "squat")
        conflicts = find_conflicts(strength_draft, record)
        assert len(conflicts) == 1
        assert conflicts[0][1] == "Back Squat"

    def test_no_match(self, strength_draft):
        record = _restricted("p1", RestrictionCategory.ACTIVITY, "sprint")
        assert find_conflicts(strength_draft, record) == []

    def test_healthy_player_never_conflicts(self, strength_draft):
        record = _restricted(
            "p1", RestrictionCategory.BODY_PART, "squat", status=PlayerStatus.HEALTHY
        )
        assert find_conflicts(strength_draft, record) == []

    def test_heart_rate_over_threshold(self, conditioning_draft):
        record = _restricted("p2", RestrictionCategory.INTENSITY, "low")
        assert find_conflicts(conditioning_draft, record, heart_rate_threshold=140)
        assert not find_conflicts(conditioning_draft, record, heart_rate_threshold=160)

    def test_restriction_ceiling_wins_over_threshold(self, conditioning_draft):
        record = _restricted("p2", RestrictionCategory.INTENSITY, "cardiac", max_heart_rate=120)
        conflicts = find_conflicts(conditioning_draft, record, heart_rate_threshold=200)
        assert "150 bpm exceeds 120 bpm" in conflicts[0][1]

    def test_max_intensity_draft(self, strength_draft):
        record = _restricted("p1", RestrictionCategory.INTENSITY, "moderate")
        draft = strength_draft.model_copy(update={"intensity": "max"})
        assert find_conflicts(draft, record)


# =============================================================================
# Checker
# =============================================================================


@pytest.mark.unit
class TestMedicalComplianceChecker:
    """Tests for the asynchronous checker."""

    @pytest.mark.asyncio
    async def test_warning_per_conflict(self, conditioning_draft, players, teams):
        lookup = FakeMedicalLookup(
            [
                _restricted("p2", RestrictionCategory.INTENSITY, "post-illness", max_heart_rate=140),
                _restricted("p3", RestrictionCategory.ACTIVITY, "bike"),
            ]
        )
        checker = MedicalComplianceChecker(lookup)

        warnings = await checker.check(conditioning_draft, players, teams)

        assert [w.field for w in warnings] == ["medical.p2", "medical.p3"]
        assert all(w.code == ValidationCode.MEDICAL_CONFLICT for w in warnings)
        assert warnings[0].message.startswith("Sam Lee has a intensity restriction")
        assert lookup.calls == [["p2", "p3"]]

    @pytest.mark.asyncio
    async def test_unknown_player_name_falls_back_to_id(self, strength_draft):
        lookup = FakeMedicalLookup([_restricted("p1", RestrictionCategory.BODY_PART, "bench")])
        warnings = await MedicalComplianceChecker(lookup).check(strength_draft, [], [])
        assert warnings[0].message.startswith("p1 has a body part restriction (bench)")

    @pytest.mark.asyncio
    async def test_no_affected_players_skips_lookup(self, strength_draft):
        lookup = FakeMedicalLookup()
        draft = strength_draft.model_copy(update={"assigned_player_ids": set()})
        assert await MedicalComplianceChecker(lookup).check(draft) == []
        assert lookup.calls == []

    @pytest.mark.asyncio
    async def test_lookup_failure(self, strength_draft, players):
        lookup = FakeMedicalLookup()
        lookup.fail_with(ConnectionError("medical service down"))

        warnings = await MedicalComplianceChecker(lookup).check(strength_draft, players)

        assert len(warnings) == 1
        assert warnings[0].field == "medical"
        assert warnings[0].code == ValidationCode.MEDICAL_CHECK_FAILED

    @pytest.mark.asyncio
    async def test_records_for_unrequested_players_ignored(self, strength_draft, players):
        async def noisy_lookup(player_ids):
            return [_restricted("p9", RestrictionCategory.BODY_PART, "squat")]

        warnings = await MedicalComplianceChecker(noisy_lookup).check(strength_draft, players)
        assert warnings == []


# =============================================================================
# Engine integration
# =============================================================================


@pytest.mark.unit
class TestEngineWithMedical:
    """Medical warnings flow through ValidationEngine.validate."""

    @pytest.mark.asyncio
    async def test_warnings_do_not_block(self, conditioning_draft, players, teams):
        lookup = FakeMedicalLookup(
            [_restricted("p2", RestrictionCategory.ACTIVITY, "work")]
        )
        result = await ValidationEngine().validate(
            conditioning_draft, players, teams, lookup, version=7
        )
        assert result.is_valid
        assert result.draft_version == 7
        assert result.codes() == [ValidationCode.MEDICAL_CONFLICT]

    @pytest.mark.asyncio
    async def test_errors_and_warnings_together(self, conditioning_draft, players, teams):
        lookup = FakeMedicalLookup()
        lookup.fail_with(TimeoutError())
        draft = conditioning_draft.model_copy(
            update={"content": ConditioningContent(intervals=[Interval(duration_seconds=5)])}
        )

        result = await ValidationEngine().validate(draft, players, teams, lookup)

        assert not result.is_valid
        assert result.codes() == [
            ValidationCode.INVALID_DURATION,
            ValidationCode.MEDICAL_CHECK_FAILED,
        ]

    @pytest.mark.asyncio
    async def test_without_lookup(self, conditioning_draft):
        result = await ValidationEngine().validate(conditioning_draft)
        assert result.warnings == []
