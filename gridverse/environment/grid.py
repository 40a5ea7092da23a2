"""Sparse occupancy grids.

A grid maps ``Location`` to at most one occupant. ``put`` and ``remove`` are
low-level primitives: they never touch an occupant's own back-references.
Actors keep the grid/actor duality intact by going through
``Actor.place_in_grid`` / ``remove_from_grid`` / ``move_to`` instead.

Adjacency queries scan the eight surrounding cells in compass order (N, NE, E,
SE, S, SW, W, NW) so that random choices over their results are reproducible
under a seeded random source.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Generic, Iterator, List, Optional, TypeVar

from ..errors import OutOfBoundsError
from .location import COMPASS, Location

T = TypeVar("T")


class Grid(ABC, Generic[T]):
    """Common contract and adjacency helpers for all grids."""

    def __init__(self) -> None:
        self._occupants: Dict[Location, T] = {}

    @property
    @abstractmethod
    def num_rows(self) -> Optional[int]:
        """Number of rows, or None if unbounded."""

    @property
    @abstractmethod
    def num_cols(self) -> Optional[int]:
        """Number of columns, or None if unbounded."""

    @abstractmethod
    def is_valid(self, loc: Location) -> bool:
        """Return True if ``loc`` lies inside this grid. Ignores occupancy."""

    def _check(self, loc: Location) -> None:
        if not self.is_valid(loc):
            raise OutOfBoundsError(loc, rows=self.num_rows, cols=self.num_cols)

    def get(self, loc: Location) -> Optional[T]:
        """Return the occupant at ``loc`` or None."""
        self._check(loc)
        return self._occupants.get(loc)

    def put(self, loc: Location, occupant: T) -> Optional[T]:
        """Store ``occupant`` at ``loc`` and return whatever was there before."""
        self._check(loc)
        if occupant is None:
            raise ValueError("occupant == None")
        previous = self._occupants.get(loc)
        self._occupants[loc] = occupant
        return previous

    def remove(self, loc: Location) -> Optional[T]:
        """Clear ``loc`` and return the occupant that was there, if any."""
        self._check(loc)
        return self._occupants.pop(loc, None)

    def occupied_locations(self) -> List[Location]:
        """All occupied locations in row-major order."""
        return sorted(self._occupants)

    def valid_adjacent_locations(self, loc: Location) -> List[Location]:
        candidates = (loc.adjacent_location(direction) for direction in COMPASS)
        return [adjacent for adjacent in candidates if self.is_valid(adjacent)]

    def empty_adjacent_locations(self, loc: Location) -> List[Location]:
        return [
            adjacent
            for adjacent in self.valid_adjacent_locations(loc)
            if adjacent not in self._occupants
        ]

    def occupied_adjacent_locations(self, loc: Location) -> List[Location]:
        return [
            adjacent
            for adjacent in self.valid_adjacent_locations(loc)
            if adjacent in self._occupants
        ]

    def neighbors(self, loc: Location) -> List[T]:
        """Occupants of the valid, occupied cells around ``loc``."""
        return [self._occupants[adjacent] for adjacent in self.occupied_adjacent_locations(loc)]

    def __contains__(self, loc: object) -> bool:
        return loc in self._occupants

    def __len__(self) -> int:
        return len(self._occupants)

    def __iter__(self) -> Iterator[T]:
        for loc in self.occupied_locations():
            yield self._occupants[loc]


class BoundedGrid(Grid[T]):
    """A ``rows`` x ``cols`` grid with locations (0, 0) .. (rows - 1, cols - 1)."""

    def __init__(self, rows: int, cols: int) -> None:
        if rows <= 0:
            raise ValueError("rows <= 0")
        if cols <= 0:
            raise ValueError("cols <= 0")
        super().__init__()
        self._rows = rows
        self._cols = cols

    @property
    def num_rows(self) -> int:
        return self._rows

    @property
    def num_cols(self) -> int:
        return self._cols

    def is_valid(self, loc: Location) -> bool:
        return 0 <= loc.row < self._rows and 0 <= loc.col < self._cols

    def empty_locations(self) -> List[Location]:
        """Every unoccupied cell, row-major."""
        return [
            Location(row, col)
            for row in range(self._rows)
            for col in range(self._cols)
            if Location(row, col) not in self._occupants
        ]

    def __repr__(self) -> str:
        return f"BoundedGrid(rows={self._rows}, cols={self._cols}, occupied={len(self)})"


class UnboundedGrid(Grid[T]):
    """A grid with no bounds; every location is valid."""

    @property
    def num_rows(self) -> None:
        return None

    @property
    def num_cols(self) -> None:
        return None

    def is_valid(self, loc: Location) -> bool:
        return True

    def __repr__(self) -> str:
        return f"UnboundedGrid(occupied={len(self)})"
