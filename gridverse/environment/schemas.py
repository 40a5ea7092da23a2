"""Pydantic schemas for grid snapshots.

These models mirror the live ``Grid`` / ``Actor`` objects but are plain,
serializable values. A display layer polls ``ActorWorld.snapshot()`` after each
step and renders from these; the live objects are never handed out for drawing.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ActorState(BaseModel):
    """Observable state of one actor at the end of a step."""

    name: Optional[str] = Field(None, description="Display name, if the actor has one")
    # Using List instead of Tuple keeps the JSON form a plain [row, col] array
    location: List[int] = Field(
        ...,
        description="[row, col] of the cell the actor occupies",
        min_length=2,
        max_length=2,
    )
    direction: int = Field(..., ge=0, lt=360, description="Compass heading in degrees")
    color: str = Field(..., description="Visual attribute used by renderers")
    energy: int = Field(..., description="Remaining energy budget")
    kinds: List[str] = Field(default_factory=list, description="Capability tags, sorted")
    holding: Optional[str] = Field(
        None, description="Name (or first kind tag) of the carried item, if any",
    )


class GridState(BaseModel):
    """Snapshot of every occupied cell in a grid."""

    step: int = Field(0, ge=0, description="Number of completed steps")
    rows: Optional[int] = Field(None, description="Row count; None for unbounded grids")
    cols: Optional[int] = Field(None, description="Column count; None for unbounded grids")
    actors: List[ActorState] = Field(
        default_factory=list, description="Occupants in row-major order",
    )


class PopulationStats(BaseModel):
    """Aggregate figures read by an external optimizer after a run."""

    step: int = Field(0, ge=0)
    population: int = Field(0, ge=0, description="Actors currently in the grid")
    total_energy: int = Field(0, description="Sum of energy over living actors")
    mean_energy: float = Field(0.0, description="total_energy / population (0 when empty)")
    by_kind: Dict[str, int] = Field(
        default_factory=dict, description="Actor count per capability tag",
    )
    deaths: int = Field(0, ge=0, description="Energy deaths since the world was created")
