"""
Actor world: the per-step scheduler.

Coordinates one synchronous step:
1. Snapshot every occupied location and resolve it to its occupant, producing
   a fixed tuple of "who existed at step start"
2. Dispatch each snapshotted actor in order, but only if it is still held by
   this world's grid (an earlier actor may have eaten, displaced or killed it)
3. Report who acted, who was skipped and who died

Everything runs on the caller's thread with no suspension points: each actor's
turn runs to completion before the next one starts. The only ordering
guarantee is snapshot order.

The world owns the seeded random source and the cost model. Actors adopt both
when they are added through ``add`` (unless they already carry their own), so
a seeded world replays identically.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .actor import Actor
from .config import Config, CostConfig
from .environment.grid import BoundedGrid, Grid
from .environment.location import Location
from .environment.schemas import GridState, PopulationStats
from .errors import IllegalStateError
from .logging_utils import log_death, log_deterministic, log_error, log_info, log_success

StepListener = Callable[[int, "ActorWorld", "StepReport"], None]
StopCondition = Callable[["ActorWorld", int], bool]


@dataclass(frozen=True)
class StepReport:
    """Outcome of a single ``ActorWorld.step``."""

    step: int
    acted: int
    skipped: int
    deaths: Tuple[Actor, ...] = field(default_factory=tuple)


class ActorWorld:
    """A grid of actors that can be stepped.

    Args:
        grid: Grid to simulate (defaults to a ``Config.GRID_ROWS`` x ``Config.GRID_COLS`` bounded grid)
        costs: Cost model handed to actors added without one (defaults to ``Config.default_costs()``)
        seed: Seed for the world's random source (defaults to ``Config.SEED``)
        rng: Explicit random source; takes precedence over ``seed``
        verbose: Print step banners and deaths (defaults to ``Config.VERBOSE``)
        step_listeners: Callables invoked after each step of ``run`` with
            (step_number, world, report)
    """

    def __init__(
        self,
        grid: Optional[Grid[Actor]] = None,
        *,
        costs: Optional[CostConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        verbose: Optional[bool] = None,
        step_listeners: Optional[List[StepListener]] = None,
    ) -> None:
        self.grid: Grid[Actor] = (
            grid if grid is not None else BoundedGrid(Config.GRID_ROWS, Config.GRID_COLS)
        )
        self.costs = costs if costs is not None else Config.default_costs()
        if rng is None:
            rng = random.Random(seed if seed is not None else Config.SEED)
        self.rng = rng
        self.verbose = Config.VERBOSE if verbose is None else verbose
        self.step_listeners: List[StepListener] = list(step_listeners or [])
        self.step_count = 0
        self.total_deaths = 0

    # Population ----------------------------------------------------------------

    def add(self, actor: Actor, loc: Optional[Location] = None) -> Optional[Location]:
        """Place ``actor`` at ``loc``, or at a random empty location.

        Returns the location used, or None when no empty location was left.
        """
        if loc is None:
            loc = self.random_empty_location()
            if loc is None:
                return None
        actor.place_in_grid(self.grid, loc)
        self._adopt(actor)
        return loc

    def _adopt(self, actor: Actor) -> None:
        """Hand the world's cost model and random source to an actor lacking them."""
        if actor.costs is None:
            actor.costs = self.costs
        if actor.rng is None:
            actor.rng = self.rng

    def remove(self, loc: Location) -> Optional[Actor]:
        """Remove and return the actor at ``loc`` (None if the cell is empty)."""
        occupant = self.grid.get(loc)
        if occupant is None:
            return None
        occupant.remove_from_grid()
        return occupant

    def random_empty_location(self) -> Optional[Location]:
        """A uniformly chosen empty cell, or None if the grid is full."""
        if not isinstance(self.grid, BoundedGrid):
            raise IllegalStateError("Random placement requires a bounded grid.")
        empty = self.grid.empty_locations()
        if not empty:
            return None
        return empty[self.rng.randrange(len(empty))]

    def actors(self) -> List[Actor]:
        """Current occupants in row-major order."""
        return list(self.grid)

    def occupied_locations(self) -> List[Location]:
        return self.grid.occupied_locations()

    # Stepping ------------------------------------------------------------------

    def step(self) -> StepReport:
        """Give every actor present at step start one turn."""
        grid = self.grid
        step_number = self.step_count + 1

        # Freeze the roster before anyone acts. Actors removed mid-step stay in
        # this tuple and are filtered by the liveness check below.
        actors = tuple(grid.get(loc) for loc in grid.occupied_locations())
        already_dead = {actor for actor in actors if actor.killed}

        acted = 0
        skipped = 0
        for actor in actors:
            # only act if another actor hasn't removed this one
            if actor.grid is grid:
                # Actors placed directly on the grid still act under this world's rules
                self._adopt(actor)
                actor.act(self)
                acted += 1
            else:
                skipped += 1

        deaths = tuple(a for a in actors if a.killed and a not in already_dead)
        self.step_count = step_number
        self.total_deaths += len(deaths)

        if self.verbose:
            log_deterministic(
                f"[Step {step_number}] {acted} acted, {skipped} skipped, {len(grid)} remaining"
            )
            for actor in deaths:
                log_death(f"[Step {step_number}] {actor!r} ran out of energy")

        return StepReport(step=step_number, acted=acted, skipped=skipped, deaths=deaths)

    def run(
        self,
        num_steps: int,
        *,
        should_stop: Optional[StopCondition] = None,
    ) -> List[StepReport]:
        """Run up to ``num_steps`` steps.

        Stops early once the grid is empty or ``should_stop(world, step)``
        returns True. Errors are reported with the failing step and re-raised.
        """
        if self.verbose:
            log_info(f"Running {num_steps} steps with {len(self.grid)} actors")

        reports: List[StepReport] = []
        for _ in range(num_steps):
            step_number = self.step_count + 1
            try:
                report = self.step()
            except Exception as e:
                log_error(f"Step {step_number} failed: {e}")
                raise
            reports.append(report)

            # Listener failures are reported but don't stop the run
            for listener in self.step_listeners:
                try:
                    listener(report.step, self, report)
                except Exception as exc:  # pragma: no cover - diagnostic hook
                    log_error(f"[Listener] {listener!r} failed: {exc}")

            if len(self.grid) == 0:
                if self.verbose:
                    log_info(f"Grid empty after step {report.step}; stopping.")
                break
            if should_stop is not None and should_stop(self, report.step):
                if self.verbose:
                    log_info(f"Stopped early at step {report.step} (stop condition met).")
                break

        if self.verbose:
            log_success(f"Run complete: {len(reports)} steps, {len(self.grid)} actors remain")
        return reports

    # Observation ---------------------------------------------------------------

    def snapshot(self) -> GridState:
        """Serializable state for display layers to poll between steps."""
        return GridState(
            step=self.step_count,
            rows=self.grid.num_rows,
            cols=self.grid.num_cols,
            actors=[actor.to_state() for actor in self.grid],
        )

    def statistics(self) -> PopulationStats:
        """Population and energy figures for an external optimizer."""
        actors = self.actors()
        total = sum(actor.energy for actor in actors)
        by_kind: Dict[str, int] = {}
        for actor in actors:
            for kind in actor.kinds:
                by_kind[kind.value] = by_kind.get(kind.value, 0) + 1
        return PopulationStats(
            step=self.step_count,
            population=len(actors),
            total_energy=total,
            mean_energy=total / len(actors) if actors else 0.0,
            by_kind=dict(sorted(by_kind.items())),
            deaths=self.total_deaths,
        )

    def __repr__(self) -> str:
        return f"ActorWorld(grid={self.grid!r}, step={self.step_count})"
