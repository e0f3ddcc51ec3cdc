"""Read-only roster references used to resolve ids to display names."""

from typing import Dict, Iterable, List

from pydantic import BaseModel, Field


class PlayerRef(BaseModel):
    id: str
    name: str

    model_config = {"frozen": True}


class TeamRef(BaseModel):
    id: str
    name: str
    player_ids: List[str] = Field(
        default_factory=list, description="Members, used to expand team assignments"
    )

    model_config = {"frozen": True}


def index_by_id(refs: Iterable[BaseModel]) -> Dict[str, BaseModel]:
    """Build an ``{id: ref}`` lookup from a directory listing."""
    return {ref.id: ref for ref in refs}
