"""
Medical Lookup Interface (Port).

Supplies medical status and restrictions for a set of players. Optional:
without a lookup the medical compliance stage of validation is skipped.
"""
from typing import Protocol, Sequence

from domain.models import MedicalRecord


class MedicalLookup(Protocol):
    """Async callable returning medical records for the requested players."""

    async def __call__(self, player_ids: Sequence[str]) -> Sequence[MedicalRecord]:
        """
        Look up medical records.

        Args:
            player_ids: Players to look up (sorted, deduplicated)

        Returns:
            Records for the players that have one; players without a record
            are treated as healthy
        """
        ...
