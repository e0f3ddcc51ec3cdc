"""
Fake Medical Lookup for testing.
"""
from typing import Dict, List, Optional, Sequence

from domain.models import MedicalRecord


class FakeMedicalLookup:
    """
    In-memory fake implementation of MedicalLookup.

    Usage:
        lookup = FakeMedicalLookup()
        lookup.seed([MedicalRecord(player_id="p1", status="injured", restrictions=[...])])
        records = await lookup(["p1", "p2"])
    """

    def __init__(self, records: Optional[Sequence[MedicalRecord]] = None):
        self._records: Dict[str, MedicalRecord] = {}
        self.calls: List[List[str]] = []
        self._error: Optional[Exception] = None
        if records:
            self.seed(records)

    def seed(self, records: Sequence[MedicalRecord]) -> None:
        for record in records:
            self._records[record.player_id] = record

    def fail_with(self, error: Optional[Exception]) -> None:
        self._error = error

    async def __call__(self, player_ids: Sequence[str]) -> List[MedicalRecord]:
        self.calls.append(list(player_ids))
        if self._error is not None:
            raise self._error
        return [self._records[pid] for pid in player_ids if pid in self._records]
