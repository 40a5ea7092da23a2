"""Grid environment: locations, occupancy grids and snapshot schemas."""

from .location import (
    AHEAD,
    COMPASS,
    EAST,
    FULL_CIRCLE,
    HALF_CIRCLE,
    HALF_LEFT,
    HALF_RIGHT,
    LEFT,
    NORTH,
    NORTHEAST,
    NORTHWEST,
    RIGHT,
    SOUTH,
    SOUTHEAST,
    SOUTHWEST,
    WEST,
    Location,
    normalize_direction,
)
from .grid import BoundedGrid, Grid, UnboundedGrid
from .schemas import ActorState, GridState, PopulationStats

__all__ = [
    "Location",
    "normalize_direction",
    "Grid",
    "BoundedGrid",
    "UnboundedGrid",
    "ActorState",
    "GridState",
    "PopulationStats",
    "COMPASS",
    "NORTH",
    "NORTHEAST",
    "EAST",
    "SOUTHEAST",
    "SOUTH",
    "SOUTHWEST",
    "WEST",
    "NORTHWEST",
    "LEFT",
    "RIGHT",
    "HALF_LEFT",
    "HALF_RIGHT",
    "FULL_CIRCLE",
    "HALF_CIRCLE",
    "AHEAD",
]
