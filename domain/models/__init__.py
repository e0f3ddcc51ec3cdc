"""
Domain models for the workout draft engine.

These models represent the core concepts of an editing session:
- WorkoutDraft: The aggregate root being edited
- StrengthContent / ConditioningContent / HybridContent / AgilityContent:
  the variant payloads, one per DocumentType
- ValidationResult / ValidationIssue: outcome of the validation pipeline
- SaveStatus: persistence lifecycle of a session
- MedicalRecord / PlayerRef / TeamRef: read-only reference data

Usage:
    >>> from domain.models import WorkoutDraft, DocumentType, ConditioningContent, Interval

    >>> draft = WorkoutDraft(
    ...     name="Bike Intervals",
    ...     document_type=DocumentType.CONDITIONING,
    ...     content=ConditioningContent(
    ...         intervals=[Interval(duration_seconds=30, rest_seconds=30)]
    ...     ),
    ... )

    >>> # Serialize to JSON
    >>> json_str = draft.model_dump_json(indent=2)

    >>> # Deserialize from JSON
    >>> draft = WorkoutDraft.model_validate_json(json_str)
"""

from domain.models.content import (
    AgilityContent,
    ConditioningContent,
    Drill,
    Exercise,
    HybridBlock,
    HybridContent,
    Interval,
    StrengthContent,
    WorkoutContent,
)
from domain.models.medical import (
    MedicalRecord,
    MedicalRestriction,
    PlayerStatus,
    RestrictionCategory,
)
from domain.models.roster import PlayerRef, TeamRef, index_by_id
from domain.models.save_status import SaveStatus
from domain.models.validation import ValidationCode, ValidationIssue, ValidationResult
from domain.models.workout_draft import (
    CONTENT_TYPES,
    DocumentType,
    WorkoutDraft,
    empty_content,
)

__all__ = [
    # Aggregate root
    "WorkoutDraft",
    "DocumentType",
    "CONTENT_TYPES",
    "empty_content",
    # Payloads
    "WorkoutContent",
    "StrengthContent",
    "ConditioningContent",
    "HybridContent",
    "AgilityContent",
    "Exercise",
    "Interval",
    "HybridBlock",
    "Drill",
    # Validation
    "ValidationCode",
    "ValidationIssue",
    "ValidationResult",
    # Status
    "SaveStatus",
    # Reference data
    "MedicalRecord",
    "MedicalRestriction",
    "PlayerStatus",
    "RestrictionCategory",
    "PlayerRef",
    "TeamRef",
    "index_by_id",
]
