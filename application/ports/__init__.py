"""
Interfaces (Ports) for the workout draft engine.

This package defines the collaborators the engine needs from its host
application. Implementations are provided by the host, by infrastructure/,
or by tests/fakes/.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations elsewhere (how it's provided)

Usage:
    from application.ports import DraftSaver, MedicalLookup, Timer

    class ApiDraftSaver:
        async def save(self, draft):
            await client.put(f"/workouts/{draft.id}", json=draft.model_dump(mode="json"))
"""

# Persistence
from application.ports.draft_saver import DraftSaver

# Medical data
from application.ports.medical_lookup import MedicalLookup

# Scheduling
from application.ports.timer import Timer, TimerHandle

__all__ = [
    "DraftSaver",
    "MedicalLookup",
    "Timer",
    "TimerHandle",
]
