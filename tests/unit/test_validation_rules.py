"""
Unit tests for the synchronous validation pipeline.

These tests verify:
- Scalar and assignment rules
- Per-variant structural rules and their field paths
- Optional total-duration bounds
- Stage ordering and determinism
"""

import pytest

from domain.models import (
    AgilityContent,
    ConditioningContent,
    DocumentType,
    Drill,
    HybridBlock,
    HybridContent,
    Interval,
    StrengthContent,
    ValidationCode,
)
from domain.validation import (
    VARIANT_RULES,
    DurationBounds,
    RuleConfig,
    ValidationEngine,
    check_structure,
)


@pytest.fixture
def engine() -> ValidationEngine:
    return ValidationEngine()


# =============================================================================
# Scalar and assignment rules
# =============================================================================


@pytest.mark.unit
class TestScalarRules:
    """Tests for name, date and assignment rules."""

    def test_valid_drafts(
        self, engine, strength_draft, conditioning_draft, hybrid_draft, agility_draft
    ):
        for draft in (strength_draft, conditioning_draft, hybrid_draft, agility_draft):
            result = engine.validate_structure(draft)
            assert result.is_valid, result.errors

    def test_blank_name(self, engine, strength_draft):
        draft = strength_draft.model_copy(update={"name": "   "})
        result = engine.validate_structure(draft)
        assert result.error_for("name").code == ValidationCode.REQUIRED_FIELD

    def test_missing_date(self, engine, strength_draft):
        draft = strength_draft.model_copy(update={"date": None})
        result = engine.validate_structure(draft)
        assert result.error_for("date").code == ValidationCode.REQUIRED_FIELD

    @pytest.mark.parametrize(
        "draft_fixture",
        ["strength_draft", "conditioning_draft", "hybrid_draft", "agility_draft"],
    )
    def test_no_assignments_for_every_variant(self, engine, draft_fixture, request):
        draft = request.getfixturevalue(draft_fixture).model_copy(
            update={"assigned_player_ids": set(), "assigned_team_ids": set()}
        )
        result = engine.validate_structure(draft)
        assert result.codes() == [ValidationCode.NO_ASSIGNMENTS]
        assert result.errors[0].field == "assignments"

    def test_assignment_rule_covers_all_variants(
        self, strength_draft, conditioning_draft, hybrid_draft, agility_draft
    ):
        drafts = [strength_draft, conditioning_draft, hybrid_draft, agility_draft]
        assert {d.document_type for d in drafts} == set(DocumentType)
        assert all(VARIANT_RULES[t].require_players for t in DocumentType)

    def test_team_only_assignment_is_enough(self, engine, strength_draft):
        draft = strength_draft.model_copy(
            update={"assigned_player_ids": set(), "assigned_team_ids": {"t1"}}
        )
        assert engine.validate_structure(draft).is_valid

    def test_stage_order(self, engine, strength_draft):
        """Scalar errors come before assignment errors, then content errors."""
        draft = strength_draft.model_copy(
            update={
                "name": "",
                "assigned_player_ids": set(),
                "content": StrengthContent(),
            }
        )
        result = engine.validate_structure(draft)
        assert result.codes() == [
            ValidationCode.REQUIRED_FIELD,
            ValidationCode.NO_ASSIGNMENTS,
            ValidationCode.EMPTY_WORKOUT,
        ]

    def test_deterministic(self, engine, conditioning_draft):
        first = engine.validate_structure(conditioning_draft, version=4)
        second = engine.validate_structure(conditioning_draft, version=4)
        assert first == second
        assert first.draft_version == 4


# =============================================================================
# Variant rules
# =============================================================================


@pytest.mark.unit
class TestVariantRules:
    """Tests for per-variant structural rules."""

    def test_every_variant_has_rules(self):
        assert set(VARIANT_RULES) == set(DocumentType)

    def test_empty_strength(self, engine, strength_draft):
        draft = strength_draft.model_copy(update={"content": StrengthContent()})
        result = engine.validate_structure(draft)
        assert result.error_for("exercises").code == ValidationCode.EMPTY_WORKOUT

    def test_empty_conditioning(self, engine, conditioning_draft):
        draft = conditioning_draft.model_copy(update={"content": ConditioningContent()})
        result = engine.validate_structure(draft)
        assert result.error_for("intervals").code == ValidationCode.EMPTY_PROGRAM

    def test_short_interval(self, engine, conditioning_draft):
        draft = conditioning_draft.model_copy(
            update={
                "content": ConditioningContent(
                    intervals=[
                        Interval(duration_seconds=30),
                        Interval(duration_seconds=5),
                    ]
                )
            }
        )
        result = engine.validate_structure(draft)
        assert not result.is_valid
        assert len(result.errors) == 1
        assert result.errors[0].field == "intervals[1].duration"
        assert result.errors[0].code == ValidationCode.INVALID_DURATION

    def test_interval_at_minimum_is_valid(self, engine, conditioning_draft):
        draft = conditioning_draft.model_copy(
            update={"content": ConditioningContent(intervals=[Interval(duration_seconds=10)])}
        )
        assert engine.validate_structure(draft).is_valid

    def test_configurable_minimum(self, conditioning_draft):
        engine = ValidationEngine(RuleConfig(min_interval_seconds=60))
        result = engine.validate_structure(conditioning_draft)
        assert [e.field for e in result.errors] == [
            "intervals[0].duration",
            "intervals[1].duration",
        ]

    def test_hybrid_blocks(self, engine, strength_draft):
        draft = strength_draft.model_copy(
            update={
                "document_type": DocumentType.HYBRID,
                "content": HybridContent(
                    blocks=[
                        HybridBlock(kind="exercise"),
                        HybridBlock(kind="interval"),
                        HybridBlock(kind="transition", duration_seconds=60),
                    ]
                ),
            }
        )
        result = engine.validate_structure(draft)
        assert result.error_for("blocks[0].exercises").code == ValidationCode.EMPTY_BLOCK
        assert result.error_for("blocks[1].interval").code == ValidationCode.MISSING_INTERVAL
        assert len(result.errors) == 2

    def test_empty_hybrid(self, engine, strength_draft):
        draft = strength_draft.model_copy(
            update={"document_type": DocumentType.HYBRID, "content": HybridContent()}
        )
        result = engine.validate_structure(draft)
        assert result.error_for("blocks").code == ValidationCode.EMPTY_WORKOUT

    def test_zero_rep_drill(self, engine, agility_draft):
        draft = agility_draft.model_copy(
            update={
                "content": AgilityContent(
                    drills=[Drill(name="Ladder", reps=2), Drill(name="Shuttle", reps=0)]
                )
            }
        )
        result = engine.validate_structure(draft)
        assert result.errors[0].field == "drills[1].reps"
        assert result.errors[0].code == ValidationCode.INVALID_REPETITIONS

    def test_empty_agility(self, engine, agility_draft):
        draft = agility_draft.model_copy(update={"content": AgilityContent()})
        result = engine.validate_structure(draft)
        assert result.error_for("drills").code == ValidationCode.EMPTY_WORKOUT


# =============================================================================
# Duration bounds
# =============================================================================


@pytest.mark.unit
class TestDurationBounds:
    """Tests for the optional total-duration range."""

    def test_no_bounds_by_default(self, engine, conditioning_draft):
        assert engine.validate_structure(conditioning_draft).is_valid

    def test_out_of_range(self, conditioning_draft):
        config = RuleConfig(
            duration_bounds={DocumentType.CONDITIONING: DurationBounds(min_seconds=600)}
        )
        result = check_structure(conditioning_draft, config)
        assert [e.code for e in result] == [ValidationCode.DURATION_OUT_OF_RANGE]
        assert result[0].field == "duration"

    def test_in_range(self, conditioning_draft):
        config = RuleConfig(
            duration_bounds={
                DocumentType.CONDITIONING: DurationBounds(min_seconds=60, max_seconds=240)
            }
        )
        assert check_structure(conditioning_draft, config) == []

    def test_reported_alongside_content_errors(self, conditioning_draft):
        """A short interval and an out-of-range total are both reported."""
        config = RuleConfig(
            duration_bounds={DocumentType.CONDITIONING: DurationBounds(min_seconds=600)}
        )
        draft = conditioning_draft.model_copy(
            update={"content": ConditioningContent(intervals=[Interval(duration_seconds=5)])}
        )
        errors = check_structure(draft, config)
        assert [e.code for e in errors] == [
            ValidationCode.INVALID_DURATION,
            ValidationCode.DURATION_OUT_OF_RANGE,
        ]
        assert [e.field for e in errors] == ["intervals[0].duration", "duration"]

    def test_other_variants_unaffected(self, strength_draft):
        config = RuleConfig(
            duration_bounds={DocumentType.CONDITIONING: DurationBounds(max_seconds=1)}
        )
        assert check_structure(strength_draft, config) == []

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError):
            DurationBounds(min_seconds=10, max_seconds=5)
