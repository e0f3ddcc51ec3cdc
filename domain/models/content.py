"""
Variant content payloads for workout drafts.

Each workout variant carries its own payload shape:
- StrengthContent: a list of exercises
- ConditioningContent: a list of work/rest intervals
- HybridContent: a list of blocks mixing exercises and intervals
- AgilityContent: a list of drills

The payloads form a discriminated union (``WorkoutContent``) keyed on the
``document_type`` literal each payload carries, so a draft can only ever hold
the payload that matches its type.

Numeric fields are permissive (``ge=0``): an interval of 5
seconds or a drill with 0 reps is a legal *draft*. Business thresholds are
enforced by the validation engine, not by the models.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


IntensityLevel = Literal["low", "medium", "high", "max"]


class Exercise(BaseModel):
    """
    Value object representing a single strength movement.

    Examples:
        >>> Exercise(name="Back Squat", sets=5, reps=5)
        >>> Exercise(name="Plank", sets=3, duration_seconds=45)
    """

    name: str = Field(..., min_length=1, description="Exercise name")
    sets: Optional[int] = Field(default=None, ge=1, description="Number of sets")
    reps: Optional[int] = Field(default=None, ge=0, description="Reps per set")
    duration_seconds: Optional[int] = Field(
        default=None, ge=0, description="Duration for timed exercises"
    )
    rest_seconds: Optional[int] = Field(
        default=None, ge=0, description="Rest after each set in seconds"
    )
    notes: Optional[str] = Field(default=None, description="Coaching notes")

    @property
    def total_seconds(self) -> int:
        """Rough time estimate: timed work plus rest, per set."""
        sets = self.sets or 1
        return sets * ((self.duration_seconds or 0) + (self.rest_seconds or 0))

    def __str__(self) -> str:
        if self.sets and self.reps:
            return f"{self.name} {self.sets}x{self.reps}"
        if self.duration_seconds:
            return f"{self.name} {self.duration_seconds}s"
        return self.name

    model_config = {"frozen": True}


class Interval(BaseModel):
    """
    Value object representing one work interval and the rest that follows it.

    Examples:
        >>> Interval(name="Sprint", duration_seconds=30, rest_seconds=90)
        >>> Interval(duration_seconds=240, target_heart_rate=165)
    """

    name: Optional[str] = Field(default=None, description="Interval label")
    duration_seconds: int = Field(..., ge=0, description="Work duration in seconds")
    rest_seconds: int = Field(default=0, ge=0, description="Rest after the work period")
    target_heart_rate: Optional[int] = Field(
        default=None, ge=0, description="Target heart rate (bpm) during work"
    )
    intensity: Optional[IntensityLevel] = Field(
        default=None, description="Perceived intensity of the work period"
    )

    @property
    def total_seconds(self) -> int:
        """Work plus rest, in seconds."""
        return self.duration_seconds + self.rest_seconds

    model_config = {"frozen": True}


BlockKind = Literal["exercise", "interval", "transition"]


class HybridBlock(BaseModel):
    """
    Value object representing one block of a hybrid workout.

    - exercise blocks carry a list of exercises
    - interval blocks carry an interval configuration
    - transition blocks are timed gaps (equipment changes, walking between stations)
    """

    kind: BlockKind = Field(..., description="Block kind")
    name: Optional[str] = Field(default=None, description="Block label")
    exercises: List[Exercise] = Field(default_factory=list)
    interval: Optional[Interval] = Field(
        default=None, description="Interval configuration for interval blocks"
    )
    rounds: int = Field(default=1, ge=1, description="Times the block is repeated")
    duration_seconds: Optional[int] = Field(
        default=None, ge=0, description="Explicit duration (transition blocks)"
    )

    @property
    def total_seconds(self) -> int:
        if self.kind == "exercise":
            return self.rounds * sum(ex.total_seconds for ex in self.exercises)
        if self.kind == "interval":
            return self.rounds * (self.interval.total_seconds if self.interval else 0)
        return self.duration_seconds or 0

    model_config = {"frozen": True}


class Drill(BaseModel):
    """Value object representing an agility drill (cones, ladders, reaction work)."""

    name: str = Field(..., min_length=1, description="Drill name")
    reps: int = Field(default=1, ge=0, description="Repetitions per set")
    sets: int = Field(default=1, ge=1)
    rest_seconds: int = Field(default=0, ge=0, description="Rest between repetitions")
    duration_seconds: Optional[int] = Field(
        default=None, ge=0, description="Target time for one repetition"
    )
    pattern: Optional[str] = Field(
        default=None, description="Layout pattern (e.g. 't-drill', 'ladder', '5-10-5')"
    )

    @property
    def total_seconds(self) -> int:
        per_rep = (self.duration_seconds or 0) + self.rest_seconds
        return self.sets * self.reps * per_rep

    model_config = {"frozen": True}


# -----------------------------------------------------------------------------
# Payloads
# -----------------------------------------------------------------------------


class StrengthContent(BaseModel):
    """Payload for strength workouts."""

    document_type: Literal["strength"] = "strength"
    exercises: List[Exercise] = Field(default_factory=list)

    @property
    def total_seconds(self) -> int:
        return sum(ex.total_seconds for ex in self.exercises)

    @property
    def movement_names(self) -> List[str]:
        return [ex.name for ex in self.exercises]

    model_config = {"frozen": True}


class ConditioningContent(BaseModel):
    """Payload for conditioning (interval) programs."""

    document_type: Literal["conditioning"] = "conditioning"
    equipment: Optional[str] = Field(
        default=None, description="Primary equipment (bike, rower, treadmill...)"
    )
    intervals: List[Interval] = Field(default_factory=list)

    @property
    def total_seconds(self) -> int:
        """Sum of interval and rest durations."""
        return sum(interval.total_seconds for interval in self.intervals)

    @property
    def movement_names(self) -> List[str]:
        names = [i.name for i in self.intervals if i.name]
        if self.equipment:
            names.append(self.equipment)
        return names

    model_config = {"frozen": True}


class HybridContent(BaseModel):
    """Payload for hybrid workouts mixing strength and intervals."""

    document_type: Literal["hybrid"] = "hybrid"
    blocks: List[HybridBlock] = Field(default_factory=list)

    @property
    def total_seconds(self) -> int:
        return sum(block.total_seconds for block in self.blocks)

    @property
    def movement_names(self) -> List[str]:
        names: List[str] = []
        for block in self.blocks:
            if block.name:
                names.append(block.name)
            names.extend(ex.name for ex in block.exercises)
            if block.interval is not None and block.interval.name:
                names.append(block.interval.name)
        return names

    model_config = {"frozen": True}


class AgilityContent(BaseModel):
    """Payload for agility sessions."""

    document_type: Literal["agility"] = "agility"
    drills: List[Drill] = Field(default_factory=list)

    @property
    def total_seconds(self) -> int:
        return sum(drill.total_seconds for drill in self.drills)

    @property
    def movement_names(self) -> List[str]:
        return [drill.name for drill in self.drills]

    model_config = {"frozen": True}


WorkoutContent = Annotated[
    Union[StrengthContent, ConditioningContent, HybridContent, AgilityContent],
    Field(discriminator="document_type"),
]
