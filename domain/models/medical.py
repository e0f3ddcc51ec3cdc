"""
Medical reference data supplied by the medical lookup collaborator.

The engine only reads these records; it never stores or mutates them.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class PlayerStatus(str, Enum):
    HEALTHY = "healthy"
    INJURED = "injured"
    LIMITED = "limited"


class RestrictionCategory(str, Enum):
    """
    - BODY_PART: a body region to protect (e.g. "knee", "shoulder")
    - ACTIVITY: a movement pattern to avoid (e.g. "jump", "sprint")
    - INTENSITY: a cap on effort, usually expressed as a heart rate ceiling
    """

    BODY_PART = "body_part"
    ACTIVITY = "activity"
    INTENSITY = "intensity"


class MedicalRestriction(BaseModel):
    category: RestrictionCategory
    value: str = Field(..., description="Body part, activity, or intensity label")
    max_heart_rate: Optional[int] = Field(
        default=None, ge=0, description="Heart rate ceiling for intensity restrictions"
    )

    model_config = {"frozen": True}


class MedicalRecord(BaseModel):
    """Medical status of one player."""

    player_id: str
    status: PlayerStatus = PlayerStatus.HEALTHY
    restrictions: List[MedicalRestriction] = Field(default_factory=list)

    @property
    def is_restricted(self) -> bool:
        """Injured or limited players are checked against the workout content."""
        return self.status in (PlayerStatus.INJURED, PlayerStatus.LIMITED)

    model_config = {"frozen": True}
