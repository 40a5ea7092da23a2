"""
Gridverse - discrete-grid occupancy and movement simulation.

Actors with a position, heading, color and energy budget live on a sparse grid.
Each step snapshots the occupants, then gives every actor still in the grid
one turn. Energy spent on actions gates survival.

No file I/O. No global state beyond environment-driven defaults.
Costs, random source and behaviors are injected by the caller.
"""

__version__ = "0.1.0"

# Main simulation components
from .world import ActorWorld, StepReport
from .actor import Actor

# Behaviors and capability tags
from .behaviors import (
    ActorKind,
    Behavior,
    FOOD_KINDS,
    Forager,
    Hunter,
    RandomWalk,
    Stationary,
    Vanish,
)

# Configuration
from .config import ActionKind, Config, CostConfig

# Environment
from .environment import (
    ActorState,
    BoundedGrid,
    Grid,
    GridState,
    Location,
    PopulationStats,
    UnboundedGrid,
)

# Errors
from .errors import (
    GridverseError,
    IllegalStateError,
    InvalidLocationError,
    InvariantViolationError,
    OutOfBoundsError,
)

__all__ = [
    # Main classes
    "ActorWorld",
    "StepReport",
    "Actor",
    # Behaviors
    "ActorKind",
    "Behavior",
    "FOOD_KINDS",
    "Forager",
    "Hunter",
    "RandomWalk",
    "Stationary",
    "Vanish",
    # Configuration
    "ActionKind",
    "Config",
    "CostConfig",
    # Environment
    "Location",
    "Grid",
    "BoundedGrid",
    "UnboundedGrid",
    "ActorState",
    "GridState",
    "PopulationStats",
    # Errors
    "GridverseError",
    "IllegalStateError",
    "InvalidLocationError",
    "InvariantViolationError",
    "OutOfBoundsError",
]
