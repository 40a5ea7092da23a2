"""
Actors: positioned, directed, colored entities with an energy budget.

Grid/actor duality
------------------
For every actor ``a`` with ``a.grid is g`` and ``a.location == loc``,
``g.get(loc) is a``; and every occupant stored in a grid points back the same
way. The protocol below is the only code that changes occupancy, and it keeps
that invariant at every public boundary:

- ``place_in_grid``: evict whatever is at the target (through ITS removal
  path), then occupy.
- ``remove_from_grid``: verify the cell still holds this actor, then clear it.
- ``move_to`` / ``handle_cross_location``: vacate the old cell first, then
  evict-and-occupy the new one, so an actor is never registered at two cells.

The actor only holds a weak reference to its grid. The grid owns the slot; the
actor's back-reference is lookup-only.

Energy lifecycle
----------------
Costed actions call ``spend_energy_and_check``. When energy drops to zero or
below the actor puts down anything it holds, leaves the grid and the call
returns True. That boolean is the death signal: callers must stop the rest of
the action. Death is normal lifecycle, not an exception.
"""

from __future__ import annotations

import random
import weakref
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from .behaviors import ActorKind, Behavior
from .config import ActionKind, Config, CostConfig
from .environment.grid import Grid
from .environment.location import NORTH, Location, normalize_direction
from .environment.schemas import ActorState
from .errors import IllegalStateError, InvalidLocationError, InvariantViolationError

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .world import ActorWorld


class Actor:
    """An entity with a color and direction that can act once per step.

    Args:
        name: Optional display name (used in logs and snapshots)
        color: Visual attribute for renderers
        direction: Initial heading in degrees; normalized to [0, 360)
        energy: Starting energy (defaults to ``Config.INITIAL_ENERGY``)
        kinds: Capability tags (see ``ActorKind``)
        behavior: Strategy invoked by ``act``; None means the actor never acts
        costs: Cost model; when None the world's model is adopted on ``ActorWorld.add``
            and ``Config.default_costs()`` is used otherwise
        rng: Random source for move selection; adopted from the world like ``costs``
    """

    def __init__(
        self,
        *,
        name: Optional[str] = None,
        color: str = "blue",
        direction: int = NORTH,
        energy: Optional[int] = None,
        kinds: Iterable[ActorKind] = (),
        behavior: Optional[Behavior] = None,
        costs: Optional[CostConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.name = name
        self.color = color
        self._direction = normalize_direction(direction)
        self.energy: int = Config.INITIAL_ENERGY if energy is None else energy
        self.kinds = frozenset(ActorKind(kind) for kind in kinds)
        self.behavior = behavior
        self.costs = costs
        self.rng = rng
        self.held_item: Optional[Actor] = None
        # Set once an energy spend has killed this actor
        self.killed = False

        self._grid_ref: Optional[weakref.ReferenceType[Grid[Actor]]] = None
        self._location: Optional[Location] = None

    # State ---------------------------------------------------------------------

    @property
    def grid(self) -> Optional[Grid["Actor"]]:
        """The grid that holds this actor, or None."""
        if self._grid_ref is None:
            return None
        return self._grid_ref()

    @property
    def location(self) -> Optional[Location]:
        """The cell this actor occupies, or None when it is not in a grid."""
        if self.grid is None:
            return None
        return self._location

    @property
    def direction(self) -> int:
        return self._direction

    @direction.setter
    def direction(self, new_direction: int) -> None:
        self._direction = normalize_direction(new_direction)

    @property
    def cost_model(self) -> CostConfig:
        return self.costs if self.costs is not None else Config.default_costs()

    @property
    def is_holding(self) -> bool:
        return self.held_item is not None

    def is_kind(self, kind: ActorKind) -> bool:
        return kind in self.kinds

    # Placement protocol --------------------------------------------------------

    def place_in_grid(self, grid: Grid["Actor"], loc: Location) -> None:
        """Put this actor into ``grid`` at ``loc``, evicting any current occupant.

        Raises:
            IllegalStateError: If this actor is already in a grid
            OutOfBoundsError: If ``loc`` is outside a bounded grid
        """
        if self.grid is not None:
            raise IllegalStateError("This actor is already contained in a grid.")

        other = grid.get(loc)
        if other is not None:
            other.remove_from_grid()
        grid.put(loc, self)
        self._grid_ref = weakref.ref(grid)
        self._location = loc
        # A re-placed actor is alive again
        self.killed = False

    def remove_from_grid(self) -> None:
        """Take this actor out of its grid.

        Raises:
            IllegalStateError: If this actor is not in a grid
            InvariantViolationError: If the grid holds someone else at this actor's location
        """
        grid = self._checked_grid()
        grid.remove(self._location)
        self._grid_ref = None
        self._location = None

    def move_to(self, new_location: Location) -> bool:
        """Spend MOVE energy, then move to ``new_location`` evicting any occupant.

        Returns False if the energy spend killed the actor (the move is
        abandoned and the actor is already out of the grid), True otherwise.
        Moving to the current location is a no-op apart from the energy spend.

        Raises:
            IllegalStateError: If this actor is not in a grid
            InvariantViolationError: If the grid holds someone else at this actor's location
            InvalidLocationError: If ``new_location`` is not valid in the grid
        """
        if self.spend_energy_and_check(ActionKind.MOVE):
            return False

        self._relocate(new_location)
        return True

    def handle_cross_location(self, new_location: Location) -> None:
        """Relocate to ``new_location`` without spending energy.

        Used when a behavior charges a different cost for crossing into an
        occupied cell than for an ordinary move (for example eating). Same
        guards and vacate/evict/occupy ordering as ``move_to``.
        """
        self._relocate(new_location)

    def _relocate(self, new_location: Location) -> None:
        grid = self._checked_grid()
        if not grid.is_valid(new_location):
            raise InvalidLocationError(new_location)

        if new_location == self._location:
            return
        grid.remove(self._location)
        other = grid.get(new_location)
        if other is not None:
            other.remove_from_grid()
        self._location = new_location
        grid.put(new_location, self)

    def _checked_grid(self) -> Grid["Actor"]:
        grid = self.grid
        if grid is None:
            raise IllegalStateError("This actor is not contained in a grid.")
        found = grid.get(self._location)
        if found is not self:
            raise InvariantViolationError(location=self._location, expected=self, found=found)
        return grid

    # Energy lifecycle ----------------------------------------------------------

    def spend_energy_and_check(self, kind: ActionKind) -> bool:
        """Charge the cost of ``kind``; return True if that killed the actor."""
        self.energy -= self.cost_model.cost_for(kind)
        if self.energy > 0:
            return False

        self.killed = True
        if self.grid is not None:
            if self.is_holding:
                self.put_held_item_down(self._location)
            # Putting the item down at our own cell already displaced us
            if self.grid is not None:
                self.remove_from_grid()
        return True

    def pick_up(self, item: "Actor") -> None:
        """Take ``item`` out of its grid (if any) and carry it."""
        if item is self:
            raise IllegalStateError("An actor cannot pick itself up.")
        if self.is_holding:
            raise IllegalStateError(f"{self!r} is already holding {self.held_item!r}.")
        if item.grid is not None:
            item.remove_from_grid()
        self.held_item = item

    def put_held_item_down(self, loc: Optional[Location] = None) -> None:
        """Place the carried item into this actor's grid at ``loc``.

        ``loc`` defaults to this actor's own cell, in which case the item
        displaces the actor (the death path relies on this). Does nothing when
        the hands are empty.
        """
        item = self.held_item
        if item is None:
            return
        grid = self._checked_grid()
        target = self._location if loc is None else loc
        item.place_in_grid(grid, target)
        # The item keeps acting in this actor's world
        if item.costs is None:
            item.costs = self.costs
        if item.rng is None:
            item.rng = self.rng
        self.clean_hands()

    def clean_hands(self) -> None:
        self.held_item = None

    # Perception ----------------------------------------------------------------

    def get_actors(self) -> List["Actor"]:
        """Actors in the eight cells around this one."""
        grid = self.grid
        if grid is None:
            raise IllegalStateError("This actor is not contained in a grid.")
        return grid.neighbors(self._location)

    def find_nearby_kinds(
        self, actors: Optional[Iterable["Actor"]] = None
    ) -> Tuple[int, int, int, int]:
        """Return presence flags as (mushroom, strawberry, creature, monster).

        ``actors`` defaults to ``get_actors()``.
        """
        if actors is None:
            actors = self.get_actors()
        seen = set()
        for other in actors:
            seen |= other.kinds
        return tuple(1 if kind in seen else 0 for kind in ActorKind)  # type: ignore[return-value]

    # Default movement ----------------------------------------------------------

    def get_move_locations(self) -> List[Location]:
        """Candidate cells for the next move: the empty neighbors."""
        grid = self.grid
        if grid is None:
            raise IllegalStateError("This actor is not contained in a grid.")
        return grid.empty_adjacent_locations(self._location)

    def select_move_location(self, locs: List[Location]) -> Optional[Location]:
        """Pick uniformly from ``locs``, or the current location when empty."""
        n = len(locs)
        if n == 0:
            return self.location
        rng = self.rng if self.rng is not None else random
        return locs[rng.randrange(n)]

    def make_move(self, loc: Optional[Location]) -> None:
        """Move to ``loc``, or leave the grid when ``loc`` is None."""
        if loc is None:
            self.remove_from_grid()
        else:
            self.move_to(loc)

    def random_act(self) -> None:
        locs = self.get_move_locations()
        self.make_move(self.select_move_location(locs))

    def act(self, world: "ActorWorld") -> None:
        """Take one turn. Actors without a behavior do nothing."""
        if self.behavior is not None:
            self.behavior.act(self, world)

    # Observation ---------------------------------------------------------------

    def to_state(self) -> ActorState:
        """Snapshot for display layers. Only valid while in a grid."""
        location = self.location
        if location is None:
            raise IllegalStateError("Only actors in a grid can be snapshotted.")
        return ActorState(
            name=self.name,
            location=location.as_list(),
            direction=self.direction,
            color=self.color,
            energy=self.energy,
            kinds=sorted(kind.value for kind in self.kinds),
            holding=_describe(self.held_item),
        )

    def __repr__(self) -> str:
        label = self.name or type(self).__name__
        return (
            f"{label}[location={self.location},direction={self.direction},"
            f"color={self.color},energy={self.energy}]"
        )


def _describe(item: Optional[Actor]) -> Optional[str]:
    if item is None:
        return None
    if item.name:
        return item.name
    if item.kinds:
        return sorted(kind.value for kind in item.kinds)[0]
    return "item"
