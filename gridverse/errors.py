"""
Exception taxonomy for Gridverse.

All structural failures are raised as exceptions and propagated to the caller;
nothing here is retried. Energy exhaustion is NOT an error: it is reported as a
boolean outcome by ``Actor.spend_energy_and_check`` and handled by the caller.

- InvariantViolationError: the grid and an actor disagree about who occupies a
  cell. Always a programming error.
- IllegalStateError: an actor was asked to do something in the wrong ownership
  state (move/remove while unplaced, place while already placed).
- InvalidLocationError: a target location is not valid in the grid.
- OutOfBoundsError: a bounded grid was accessed outside its bounds.
"""

from __future__ import annotations

from typing import Any, Optional


class GridverseError(Exception):
    """Base class for every error raised by the package."""


class InvariantViolationError(GridverseError):
    """Raised when a grid cell does not hold the actor that claims to live there.

    Carries the location plus the expected and found occupants so the corrupted
    cell can be inspected from the traceback.
    """

    def __init__(self, *, location: Any, expected: Any, found: Any) -> None:
        self.location = location
        self.expected = expected
        self.found = found
        message = (
            f"The grid contains a different actor at location {location}.\n"
            f"  expected: {expected!r}\n"
            f"  found:    {found!r}\n\n"
            "The grid was mutated without going through the actor protocol.\n"
            "Use Actor.place_in_grid / remove_from_grid / move_to instead of Grid.put / Grid.remove."
        )
        super().__init__(message)


class IllegalStateError(GridverseError):
    """Raised when an operation is attempted in the wrong ownership state."""


class InvalidLocationError(GridverseError, ValueError):
    """Raised when a location is not valid in the grid it is used with."""

    def __init__(self, location: Any, message: Optional[str] = None) -> None:
        self.location = location
        super().__init__(message or f"Location {location} is not valid.")


class OutOfBoundsError(InvalidLocationError):
    """Raised by bounded grids when a location falls outside their bounds."""

    def __init__(self, location: Any, *, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        super().__init__(
            location,
            f"Location {location} is out of bounds for a {rows}x{cols} grid.",
        )
