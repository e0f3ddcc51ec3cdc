"""
WorkoutDraft - the root editable document of an editing session.

A draft is a partially-built workout. Unlike a persisted workout it may be
incomplete (empty name, no exercises yet); completeness is decided by the
validation engine, not by the model.
"""

from datetime import date as Date
from enum import Enum
from typing import Dict, List, Optional, Set, Type

from pydantic import BaseModel, Field, field_validator, model_validator

from domain.models.content import (
    AgilityContent,
    ConditioningContent,
    HybridContent,
    IntensityLevel,
    StrengthContent,
    WorkoutContent,
)


class DocumentType(str, Enum):
    """
    The four workout variants.

    - STRENGTH: sets/reps based exercises
    - CONDITIONING: work/rest interval programs
    - HYBRID: blocks mixing exercises and intervals
    - AGILITY: drill based sessions
    """

    STRENGTH = "strength"
    CONDITIONING = "conditioning"
    HYBRID = "hybrid"
    AGILITY = "agility"


CONTENT_TYPES: Dict[DocumentType, Type[BaseModel]] = {
    DocumentType.STRENGTH: StrengthContent,
    DocumentType.CONDITIONING: ConditioningContent,
    DocumentType.HYBRID: HybridContent,
    DocumentType.AGILITY: AgilityContent,
}


def empty_content(document_type: DocumentType) -> WorkoutContent:
    """Return an empty payload for the given variant."""
    return CONTENT_TYPES[DocumentType(document_type)]()


class WorkoutDraft(BaseModel):
    """
    Aggregate root for an in-progress workout.

    Exactly one content payload is held, and its tag always matches
    ``document_type``.

    Examples:
        >>> from domain.models import WorkoutDraft, DocumentType, StrengthContent, Exercise

        >>> draft = WorkoutDraft(
        ...     name="Monday Lift",
        ...     document_type=DocumentType.STRENGTH,
        ...     content=StrengthContent(exercises=[Exercise(name="Squat", sets=5, reps=5)]),
        ...     assigned_team_ids={"team-a"},
        ... )
        >>> draft.content.exercises[0].name
        'Squat'
    """

    # Identity
    id: Optional[str] = Field(
        default=None,
        description="Identifier of the persisted record. None for new drafts.",
    )
    name: str = Field(default="", max_length=200, description="Workout name")
    document_type: DocumentType = Field(..., description="Workout variant")

    # Scheduling
    date: Optional[Date] = Field(default=None, description="Scheduled date")
    duration_minutes: int = Field(
        default=60, gt=0, description="Planned session length in minutes"
    )
    location: Optional[str] = Field(default=None, description="Venue or facility")

    # Assignment
    assigned_player_ids: Set[str] = Field(default_factory=set)
    assigned_team_ids: Set[str] = Field(default_factory=set)

    # Descriptive
    intensity: Optional[IntensityLevel] = Field(default=None)
    tags: List[str] = Field(default_factory=list)
    notes: Optional[str] = Field(default=None, max_length=2000)

    # Variant payload
    content: WorkoutContent

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: List[str]) -> List[str]:
        """Lowercase, strip and deduplicate tags, preserving order."""
        seen = set()
        unique = []
        for tag in v:
            normalized = tag.lower().strip()
            if normalized and normalized not in seen:
                seen.add(normalized)
                unique.append(normalized)
        return unique

    @model_validator(mode="before")
    @classmethod
    def default_content(cls, data):
        """Fill an empty payload of the right variant when none is given."""
        if isinstance(data, dict) and data.get("content") is None and data.get("document_type"):
            data = {**data, "content": empty_content(data["document_type"])}
        return data

    @model_validator(mode="after")
    def check_content_matches_type(self) -> "WorkoutDraft":
        if self.content.document_type != self.document_type.value:
            raise ValueError(
                f"{self.content.document_type} content cannot be used for a "
                f"{self.document_type.value} workout"
            )
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def estimated_duration_seconds(self) -> int:
        """Estimated duration derived from the payload."""
        return self.content.total_seconds

    @property
    def movement_names(self) -> List[str]:
        """Every named movement in the payload (exercises, drills, blocks, intervals)."""
        return self.content.movement_names

    @property
    def has_assignments(self) -> bool:
        return bool(self.assigned_player_ids or self.assigned_team_ids)

    @property
    def is_new(self) -> bool:
        """Check if this draft has never been persisted."""
        return self.id is None

    def snapshot(self) -> "WorkoutDraft":
        """Return an independent deep copy of this draft."""
        return self.model_copy(deep=True)

    def __str__(self) -> str:
        parts = [f'"{self.name}"' if self.name else "(untitled)", self.document_type.value]
        assigned = len(self.assigned_player_ids) + len(self.assigned_team_ids)
        if assigned:
            parts.append(f"{assigned} assignments")
        return f"WorkoutDraft({', '.join(parts)})"
