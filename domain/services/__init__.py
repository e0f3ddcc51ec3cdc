"""
Domain services for editing a workout draft.

- HistoryManager: bounded undo/redo log of draft snapshots
- DraftStore: current draft, baseline, dirty flag and change notifications
- AssignmentHelpers: player/team set membership routed through the store
- templates: built-in starter drafts
"""

from domain.services.assignments import AssignmentHelpers
from domain.services.draft_store import (
    DraftChange,
    DraftPatchError,
    DraftStore,
)
from domain.services.history import HistoryEntry, HistoryManager
from domain.services.templates import (
    DraftTemplate,
    TemplateNotFoundError,
    get_template,
    list_templates,
    template_patch,
)

__all__ = [
    "AssignmentHelpers",
    "DraftChange",
    "DraftPatchError",
    "DraftStore",
    "HistoryEntry",
    "HistoryManager",
    "DraftTemplate",
    "TemplateNotFoundError",
    "get_template",
    "list_templates",
    "template_patch",
]
