"""Grid coordinates and compass directions.

Rows grow downward and columns grow to the right, so NORTH is ``row - 1``.
Directions are compass headings in degrees, normalized to [0, 360).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Turn angles
LEFT = -90
RIGHT = 90
HALF_LEFT = -45
HALF_RIGHT = 45
FULL_CIRCLE = 360
HALF_CIRCLE = 180
AHEAD = 0

# Compass directions
NORTH = 0
NORTHEAST = 45
EAST = 90
SOUTHEAST = 135
SOUTH = 180
SOUTHWEST = 225
WEST = 270
NORTHWEST = 315

# Scan order used by every adjacency query
COMPASS = (NORTH, NORTHEAST, EAST, SOUTHEAST, SOUTH, SOUTHWEST, WEST, NORTHWEST)

_OFFSETS = {
    NORTH: (-1, 0),
    NORTHEAST: (-1, 1),
    EAST: (0, 1),
    SOUTHEAST: (1, 1),
    SOUTH: (1, 0),
    SOUTHWEST: (1, -1),
    WEST: (0, -1),
    NORTHWEST: (-1, -1),
}


def normalize_direction(direction: int) -> int:
    """Map any integer angle to the equivalent heading in [0, 360)."""
    return direction % FULL_CIRCLE


def _snap(angle: float) -> int:
    # Round to the nearest multiple of 45 degrees
    adjusted = int(math.floor(angle + HALF_RIGHT / 2)) % FULL_CIRCLE
    return (adjusted // HALF_RIGHT) * HALF_RIGHT


@dataclass(frozen=True, order=True)
class Location:
    """An immutable (row, col) pair. Ordering is row-major."""

    row: int
    col: int

    def adjacent_location(self, direction: int) -> "Location":
        """Return the neighbor in the compass direction closest to ``direction``."""
        dr, dc = _OFFSETS[_snap(direction)]
        return Location(self.row + dr, self.col + dc)

    def direction_toward(self, target: "Location") -> int:
        """Return the compass heading, rounded to 45 degrees, that points at ``target``."""
        dx = target.col - self.col
        dy = target.row - self.row
        # atan2 measures counterclockwise from east with y up; compass is clockwise from north
        angle = math.degrees(math.atan2(-dy, dx))
        return _snap(RIGHT - angle)

    def as_list(self) -> list[int]:
        return [self.row, self.col]

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"
