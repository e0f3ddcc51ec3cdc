"""
Synchronous validation rules.

Rules are grouped in three stages:
1. Scalar rules that apply to every draft (name, document type, date)
2. The assignment rule, enabled per variant by ``VariantRules.require_players``
3. Variant structural rules, dispatched through ``VARIANT_RULES``

Every rule returns a list of ``ValidationIssue`` and never raises.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from domain.models import (
    AgilityContent,
    ConditioningContent,
    DocumentType,
    HybridContent,
    StrengthContent,
    ValidationCode,
    ValidationIssue,
    WorkoutDraft,
)

DEFAULT_MIN_INTERVAL_SECONDS = 10
DEFAULT_HEART_RATE_THRESHOLD = 160


@dataclass(frozen=True)
class DurationBounds:
    """Inclusive range for the computed total duration, in seconds."""

    min_seconds: Optional[int] = None
    max_seconds: Optional[int] = None

    def __post_init__(self) -> None:
        if (
            self.min_seconds is not None
            and self.max_seconds is not None
            and self.min_seconds > self.max_seconds
        ):
            raise ValueError("min_seconds must not exceed max_seconds")

    def contains(self, total_seconds: int) -> bool:
        if self.min_seconds is not None and total_seconds < self.min_seconds:
            return False
        if self.max_seconds is not None and total_seconds > self.max_seconds:
            return False
        return True


@dataclass(frozen=True)
class RuleConfig:
    """Tunable thresholds for the validation pipeline."""

    min_interval_seconds: int = DEFAULT_MIN_INTERVAL_SECONDS
    medical_heart_rate_threshold: int = DEFAULT_HEART_RATE_THRESHOLD
    duration_bounds: Dict[DocumentType, DurationBounds] = field(default_factory=dict)


def _issue(field_path: str, message: str, code: ValidationCode) -> ValidationIssue:
    return ValidationIssue(field=field_path, message=message, code=code)


# -----------------------------------------------------------------------------
# Stage 1: scalar rules
# -----------------------------------------------------------------------------


def check_scalars(draft: WorkoutDraft) -> List[ValidationIssue]:
    errors: List[ValidationIssue] = []
    if not draft.name or not draft.name.strip():
        errors.append(_issue("name", "Workout name is required", ValidationCode.REQUIRED_FIELD))
    if not draft.document_type:
        errors.append(
            _issue("documentType", "Workout type is required", ValidationCode.REQUIRED_FIELD)
        )
    if draft.date is None:
        errors.append(_issue("date", "Workout date is required", ValidationCode.REQUIRED_FIELD))
    return errors


# -----------------------------------------------------------------------------
# Stage 2: assignment rule
# -----------------------------------------------------------------------------


def check_assignments(draft: WorkoutDraft) -> List[ValidationIssue]:
    if draft.has_assignments:
        return []
    return [
        _issue(
            "assignments",
            "At least one player or team must be assigned",
            ValidationCode.NO_ASSIGNMENTS,
        )
    ]


# -----------------------------------------------------------------------------
# Stage 3: variant structural rules
# -----------------------------------------------------------------------------


def check_strength(content: StrengthContent, config: RuleConfig) -> List[ValidationIssue]:
    if not content.exercises:
        return [
            _issue("exercises", "At least one exercise is required", ValidationCode.EMPTY_WORKOUT)
        ]
    return []


def check_conditioning(content: ConditioningContent, config: RuleConfig) -> List[ValidationIssue]:
    if not content.intervals:
        return [
            _issue("intervals", "At least one interval is required", ValidationCode.EMPTY_PROGRAM)
        ]

    errors: List[ValidationIssue] = []
    for i, interval in enumerate(content.intervals):
        if interval.duration_seconds < config.min_interval_seconds:
            errors.append(
                _issue(
                    f"intervals[{i}].duration",
                    f"Interval {i + 1} must last at least "
                    f"{config.min_interval_seconds} seconds",
                    ValidationCode.INVALID_DURATION,
                )
            )
    return errors


def check_hybrid(content: HybridContent, config: RuleConfig) -> List[ValidationIssue]:
    if not content.blocks:
        return [_issue("blocks", "At least one block is required", ValidationCode.EMPTY_WORKOUT)]

    errors: List[ValidationIssue] = []
    for i, block in enumerate(content.blocks):
        if block.kind == "exercise" and not block.exercises:
            errors.append(
                _issue(
                    f"blocks[{i}].exercises",
                    f"Exercise block {i + 1} has no exercises",
                    ValidationCode.EMPTY_BLOCK,
                )
            )
        elif block.kind == "interval" and block.interval is None:
            errors.append(
                _issue(
                    f"blocks[{i}].interval",
                    f"Interval block {i + 1} has no interval configuration",
                    ValidationCode.MISSING_INTERVAL,
                )
            )
    return errors


def check_agility(content: AgilityContent, config: RuleConfig) -> List[ValidationIssue]:
    if not content.drills:
        return [_issue("drills", "At least one drill is required", ValidationCode.EMPTY_WORKOUT)]

    errors: List[ValidationIssue] = []
    for i, drill in enumerate(content.drills):
        if drill.reps < 1:
            errors.append(
                _issue(
                    f"drills[{i}].reps",
                    f"Drill '{drill.name}' needs at least one repetition",
                    ValidationCode.INVALID_REPETITIONS,
                )
            )
    return errors


def check_duration_bounds(draft: WorkoutDraft, config: RuleConfig) -> List[ValidationIssue]:
    """Optional total-duration range, only when bounds are configured for the variant."""
    bounds = config.duration_bounds.get(draft.document_type)
    if bounds is None:
        return []
    total = draft.estimated_duration_seconds
    if bounds.contains(total):
        return []
    return [
        _issue(
            "duration",
            f"Total duration of {total} seconds is outside the allowed range "
            f"({bounds.min_seconds}-{bounds.max_seconds} seconds)",
            ValidationCode.DURATION_OUT_OF_RANGE,
        )
    ]


@dataclass(frozen=True)
class VariantRules:
    """Rule table entry for one document type."""

    require_players: bool
    check_content: Callable[..., List[ValidationIssue]]


VARIANT_RULES: Dict[DocumentType, VariantRules] = {
    DocumentType.STRENGTH: VariantRules(require_players=True, check_content=check_strength),
    DocumentType.CONDITIONING: VariantRules(
        require_players=True, check_content=check_conditioning
    ),
    DocumentType.HYBRID: VariantRules(require_players=True, check_content=check_hybrid),
    DocumentType.AGILITY: VariantRules(require_players=True, check_content=check_agility),
}

_missing = set(DocumentType) - set(VARIANT_RULES)
if _missing:
    raise RuntimeError(f"No validation rules registered for: {sorted(m.value for m in _missing)}")


def check_structure(draft: WorkoutDraft, config: RuleConfig) -> List[ValidationIssue]:
    """Run stages 1-3 and return every error found, in stage order."""
    rules = VARIANT_RULES[draft.document_type]
    errors = check_scalars(draft)
    if rules.require_players:
        errors.extend(check_assignments(draft))
    errors.extend(rules.check_content(draft.content, config))
    errors.extend(check_duration_bounds(draft, config))
    return errors
