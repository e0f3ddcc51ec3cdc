"""
Medical compliance check - cross-references player restrictions with a draft.

This is a best-effort heuristic and only ever produces warnings:
- body part / activity restrictions match when the restriction value is a
  case-insensitive substring of any movement name in the draft
- intensity restrictions match when an interval's target heart rate exceeds
  the restriction's ceiling (or the configured threshold), or the draft
  intensity is "max"

There is no precedence between restrictions: each matching (player,
restriction) pair yields one warning.
"""

import logging
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Sequence

from domain.models import (
    ConditioningContent,
    HybridContent,
    Interval,
    MedicalRecord,
    MedicalRestriction,
    PlayerRef,
    RestrictionCategory,
    TeamRef,
    ValidationCode,
    ValidationIssue,
    WorkoutDraft,
    index_by_id,
)
from domain.validation.rules import DEFAULT_HEART_RATE_THRESHOLD

logger = logging.getLogger(__name__)

MedicalLookupFn = Callable[[Sequence[str]], Awaitable[Sequence[MedicalRecord]]]

_CATEGORY_LABELS = {
    RestrictionCategory.BODY_PART: "body part",
    RestrictionCategory.ACTIVITY: "activity",
    RestrictionCategory.INTENSITY: "intensity",
}


def affected_player_ids(draft: WorkoutDraft, teams: Iterable[TeamRef] = ()) -> List[str]:
    """
    Players assigned directly plus the members of assigned teams, sorted.

    Teams missing from the directory contribute no players.
    """
    ids = set(draft.assigned_player_ids)
    for team in teams:
        if team.id in draft.assigned_team_ids:
            ids.update(team.player_ids)
    return sorted(ids)


def _display_name(directory: Dict[str, PlayerRef], player_id: str) -> str:
    player = directory.get(player_id)
    return player.name if player is not None else player_id


def _workout_intervals(draft: WorkoutDraft) -> List[Interval]:
    content = draft.content
    if isinstance(content, ConditioningContent):
        return list(content.intervals)
    if isinstance(content, HybridContent):
        return [b.interval for b in content.blocks if b.interval is not None]
    return []


def find_conflicts(
    draft: WorkoutDraft,
    record: MedicalRecord,
    *,
    heart_rate_threshold: int = DEFAULT_HEART_RATE_THRESHOLD,
) -> List[tuple]:
    """
    Return ``(restriction, detail)`` pairs for every restriction the draft violates.

    Healthy players never conflict.
    """
    if not record.is_restricted:
        return []

    names = draft.movement_names
    conflicts = []
    for restriction in record.restrictions:
        detail = _match(restriction, draft, names, heart_rate_threshold)
        if detail:
            conflicts.append((restriction, detail))
    return conflicts


def _match(
    restriction: MedicalRestriction,
    draft: WorkoutDraft,
    names: List[str],
    heart_rate_threshold: int,
) -> Optional[str]:
    if restriction.category == RestrictionCategory.INTENSITY:
        ceiling = restriction.max_heart_rate or heart_rate_threshold
        over = [
            i.target_heart_rate
            for i in _workout_intervals(draft)
            if i.target_heart_rate is not None and i.target_heart_rate > ceiling
        ]
        if over:
            return f"target heart rate {max(over)} bpm exceeds {ceiling} bpm"
        if draft.intensity == "max":
            return "workout intensity is max"
        return None

    needle = restriction.value.lower().strip()
    if not needle:
        return None
    matched = [name for name in names if needle in name.lower()]
    if matched:
        return ", ".join(matched)
    return None


class MedicalComplianceChecker:
    """
    Asynchronous compliance stage of the validation pipeline.

    Usage:
        >>> checker = MedicalComplianceChecker(lookup, heart_rate_threshold=160)
        >>> warnings = await checker.check(draft, players, teams)
    """

    def __init__(
        self,
        lookup: MedicalLookupFn,
        *,
        heart_rate_threshold: int = DEFAULT_HEART_RATE_THRESHOLD,
    ) -> None:
        self._lookup = lookup
        self._heart_rate_threshold = heart_rate_threshold

    async def check(
        self,
        draft: WorkoutDraft,
        players: Iterable[PlayerRef] = (),
        teams: Iterable[TeamRef] = (),
    ) -> List[ValidationIssue]:
        player_ids = affected_player_ids(draft, teams)
        if not player_ids:
            return []

        try:
            records = await self._lookup(player_ids)
        except Exception as e:
            logger.warning(f"Medical lookup failed for {len(player_ids)} players: {e}")
            return [
                ValidationIssue(
                    field="medical",
                    message="Medical restrictions could not be checked",
                    code=ValidationCode.MEDICAL_CHECK_FAILED,
                )
            ]

        directory = index_by_id(players)
        wanted = set(player_ids)
        by_player = {r.player_id: r for r in records if r.player_id in wanted}

        warnings: List[ValidationIssue] = []
        for player_id in player_ids:
            record = by_player.get(player_id)
            if record is None:
                continue
            conflicts = find_conflicts(
                draft, record, heart_rate_threshold=self._heart_rate_threshold
            )
            for restriction, detail in conflicts:
                label = _CATEGORY_LABELS[restriction.category]
                warnings.append(
                    ValidationIssue(
                        field=f"medical.{player_id}",
                        message=(
                            f"{_display_name(directory, player_id)} has a {label} "
                            f"restriction ({restriction.value}): {detail}"
                        ),
                        code=ValidationCode.MEDICAL_CONFLICT,
                    )
                )

        if warnings:
            logger.info(f"Medical compliance produced {len(warnings)} warnings")
        return warnings
