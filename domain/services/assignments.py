"""
Assignment helpers - player/team set membership for a draft.

Centralizes the add/remove logic so callers never duplicate it. Adds are
idempotent and removing an absent id is a no-op; neither produces a patch
or a history entry when nothing changes.
"""

from typing import Iterable, Literal, Optional

from domain.models import WorkoutDraft
from domain.services.draft_store import DraftStore

AssignmentField = Literal["assigned_player_ids", "assigned_team_ids"]


class AssignmentHelpers:
    """Routes assignment edits through ``DraftStore.apply_patch``."""

    def __init__(self, store: DraftStore) -> None:
        self._store = store

    def add_player(self, player_id: str) -> Optional[WorkoutDraft]:
        return self._add("assigned_player_ids", player_id)

    def remove_player(self, player_id: str) -> Optional[WorkoutDraft]:
        return self._remove("assigned_player_ids", player_id)

    def add_team(self, team_id: str) -> Optional[WorkoutDraft]:
        return self._add("assigned_team_ids", team_id)

    def remove_team(self, team_id: str) -> Optional[WorkoutDraft]:
        return self._remove("assigned_team_ids", team_id)

    def set_players(self, player_ids: Iterable[str]) -> Optional[WorkoutDraft]:
        """Replace the player assignment set in a single patch."""
        new_ids = set(player_ids)
        if new_ids == self._store.draft.assigned_player_ids:
            return None
        return self._store.apply_patch(assigned_player_ids=new_ids)

    def clear_assignments(self) -> Optional[WorkoutDraft]:
        """Remove every player and team in a single patch."""
        if not self._store.draft.has_assignments:
            return None
        return self._store.apply_patch(assigned_player_ids=set(), assigned_team_ids=set())

    def _add(self, field: AssignmentField, item_id: str) -> Optional[WorkoutDraft]:
        current = getattr(self._store.draft, field)
        if item_id in current:
            return None
        return self._store.apply_patch({field: current | {item_id}})

    def _remove(self, field: AssignmentField, item_id: str) -> Optional[WorkoutDraft]:
        current = getattr(self._store.draft, field)
        if item_id not in current:
            return None
        return self._store.apply_patch({field: current - {item_id}})
