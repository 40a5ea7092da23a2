"""
Gridverse Configuration

Loads defaults from environment variables (and a local .env file) and defines
the cost model consumed by the energy lifecycle. An external trainer normally
builds its own ``CostConfig`` and injects it into ``ActorWorld``; the
environment values only supply defaults.
"""

import os
from enum import Enum

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists
load_dotenv()


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class ActionKind(str, Enum):
    """Costed action kinds; selects which cost constant an action spends."""

    MOVE = "move"
    EAT = "eat"


class CostConfig(BaseModel):
    """Energy cost per action kind. Read-only to the simulation."""

    model_config = {"frozen": True}

    move_cost_energy: int = Field(..., ge=0, description="Energy spent by each move")
    eat_cost_energy: int = Field(..., ge=0, description="Energy spent by each eat action")

    def cost_for(self, kind: ActionKind) -> int:
        # Anything that is not an eat is charged as a move
        if kind == ActionKind.EAT:
            return self.eat_cost_energy
        return self.move_cost_energy


class Config:
    """Application configuration loaded from environment variables."""

    # Energy costs
    MOVE_COST_ENERGY: int = int(os.getenv("GRIDVERSE_MOVE_COST_ENERGY", "1"))
    EAT_COST_ENERGY: int = int(os.getenv("GRIDVERSE_EAT_COST_ENERGY", "2"))

    # Starting energy for actors created without an explicit value
    INITIAL_ENERGY: int = int(os.getenv("GRIDVERSE_INITIAL_ENERGY", "100"))

    # Default world size
    GRID_ROWS: int = int(os.getenv("GRIDVERSE_GRID_ROWS", "10"))
    GRID_COLS: int = int(os.getenv("GRIDVERSE_GRID_COLS", "10"))

    # Random source; unset means nondeterministic
    SEED: int | None = _optional_int("GRIDVERSE_SEED")

    # Logging
    VERBOSE: bool = os.getenv("GRIDVERSE_VERBOSE", "").lower() in ("1", "true", "yes")

    @classmethod
    def default_costs(cls) -> CostConfig:
        """Build a ``CostConfig`` from the configured cost constants."""
        return CostConfig(
            move_cost_energy=cls.MOVE_COST_ENERGY,
            eat_cost_energy=cls.EAT_COST_ENERGY,
        )

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors on values that cannot run."""
        if cls.MOVE_COST_ENERGY < 0 or cls.EAT_COST_ENERGY < 0:
            raise ValueError(
                "Energy costs must be >= 0 "
                "(check GRIDVERSE_MOVE_COST_ENERGY and GRIDVERSE_EAT_COST_ENERGY)"
            )

        if cls.GRID_ROWS <= 0 or cls.GRID_COLS <= 0:
            raise ValueError(
                "GRIDVERSE_GRID_ROWS and GRIDVERSE_GRID_COLS must both be positive"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Gridverse Configuration:",
            f"  Move Cost: {cls.MOVE_COST_ENERGY}",
            f"  Eat Cost: {cls.EAT_COST_ENERGY}",
            f"  Initial Energy: {cls.INITIAL_ENERGY}",
            f"  Grid: {cls.GRID_ROWS}x{cls.GRID_COLS}",
            f"  Seed: {cls.SEED if cls.SEED is not None else 'random'}",
        ]
        return "\n".join(lines)
