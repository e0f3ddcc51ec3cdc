"""
Built-in starter templates for new drafts.

A template is a named initial patch for ``DraftStore.initialize``. Templates
never carry assignments or dates; those belong to the session.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from domain.models import (
    AgilityContent,
    ConditioningContent,
    DocumentType,
    Drill,
    Exercise,
    HybridBlock,
    HybridContent,
    Interval,
    StrengthContent,
)


class TemplateNotFoundError(KeyError):
    """Raised when a template id is not registered."""


@dataclass(frozen=True)
class DraftTemplate:
    id: str
    name: str
    document_type: DocumentType
    duration_minutes: int
    content: Any
    tags: List[str] = field(default_factory=list)

    def to_patch(self) -> Dict[str, Any]:
        """Initial patch reproducing this template in a fresh draft."""
        return {
            "name": self.name,
            "duration_minutes": self.duration_minutes,
            "content": self.content.model_copy(deep=True),
            "tags": list(self.tags),
        }


_TEMPLATES: Dict[str, DraftTemplate] = {
    t.id: t
    for t in [
        DraftTemplate(
            id="strength-upper-body",
            name="Upper Body Strength",
            document_type=DocumentType.STRENGTH,
            duration_minutes=60,
            content=StrengthContent(
                exercises=[
                    Exercise(name="Bench Press", sets=4, reps=6, rest_seconds=120),
                    Exercise(name="Pull-up", sets=4, reps=8, rest_seconds=90),
                    Exercise(name="Overhead Press", sets=3, reps=8, rest_seconds=90),
                ]
            ),
            tags=["strength", "upper-body"],
        ),
        DraftTemplate(
            id="conditioning-bike-intervals",
            name="Bike Intervals",
            document_type=DocumentType.CONDITIONING,
            duration_minutes=30,
            content=ConditioningContent(
                equipment="bike",
                intervals=[
                    Interval(name="Warm-up", duration_seconds=300, intensity="low"),
                    *[
                        Interval(
                            name="Work",
                            duration_seconds=30,
                            rest_seconds=90,
                            target_heart_rate=170,
                            intensity="high",
                        )
                        for _ in range(8)
                    ],
                    Interval(name="Cool-down", duration_seconds=300, intensity="low"),
                ],
            ),
            tags=["conditioning", "bike"],
        ),
        DraftTemplate(
            id="hybrid-circuit",
            name="Hybrid Circuit",
            document_type=DocumentType.HYBRID,
            duration_minutes=45,
            content=HybridContent(
                blocks=[
                    HybridBlock(
                        kind="exercise",
                        name="Strength Block",
                        rounds=3,
                        exercises=[
                            Exercise(name="Goblet Squat", sets=1, reps=10),
                            Exercise(name="Push-up", sets=1, reps=15),
                        ],
                    ),
                    HybridBlock(kind="transition", name="Move to rower", duration_seconds=60),
                    HybridBlock(
                        kind="interval",
                        name="Row",
                        rounds=4,
                        interval=Interval(name="Row", duration_seconds=60, rest_seconds=60),
                    ),
                ]
            ),
            tags=["hybrid", "circuit"],
        ),
        DraftTemplate(
            id="agility-ladder",
            name="Ladder & Cone Agility",
            document_type=DocumentType.AGILITY,
            duration_minutes=30,
            content=AgilityContent(
                drills=[
                    Drill(name="Ladder In-Out", reps=4, sets=2, pattern="ladder"),
                    Drill(name="5-10-5 Shuttle", reps=6, rest_seconds=30, pattern="5-10-5"),
                    Drill(name="T-Drill", reps=4, rest_seconds=45, pattern="t-drill"),
                ]
            ),
            tags=["agility"],
        ),
    ]
}


def list_templates(document_type: Optional[DocumentType] = None) -> List[DraftTemplate]:
    """Registered templates, optionally filtered by variant."""
    templates = list(_TEMPLATES.values())
    if document_type is not None:
        templates = [t for t in templates if t.document_type == DocumentType(document_type)]
    return templates


def get_template(template_id: str) -> DraftTemplate:
    try:
        return _TEMPLATES[template_id]
    except KeyError:
        raise TemplateNotFoundError(template_id) from None


def template_patch(template_id: str) -> Dict[str, Any]:
    """Initial patch for ``DraftStore.initialize``, built from a registered template."""
    return get_template(template_id).to_patch()
