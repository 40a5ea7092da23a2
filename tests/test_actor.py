"""Tests for the actor placement and movement protocol."""

import gc
import random

import pytest

from gridverse.actor import Actor
from gridverse.behaviors import ActorKind
from gridverse.config import CostConfig
from gridverse.environment import EAST, BoundedGrid, Location
from gridverse.errors import (
    IllegalStateError,
    InvalidLocationError,
    InvariantViolationError,
)

FREE = CostConfig(move_cost_energy=0, eat_cost_energy=0)
CHEAP = CostConfig(move_cost_energy=1, eat_cost_energy=2)


def make_actor(name: str, energy: int = 50, costs: CostConfig = CHEAP, **kwargs) -> Actor:
    return Actor(name=name, energy=energy, costs=costs, **kwargs)


def assert_consistent(grid) -> None:
    """Every occupied cell points at an actor that points back at it."""
    for loc in grid.occupied_locations():
        occupant = grid.get(loc)
        assert occupant.location == loc
        assert occupant.grid is grid


def test_new_actor_is_unowned():
    actor = make_actor("a")
    assert actor.grid is None
    assert actor.location is None
    assert actor.held_item is None


def test_place_in_grid_sets_back_references():
    grid = BoundedGrid(5, 5)
    actor = make_actor("a")
    actor.place_in_grid(grid, Location(2, 2))

    assert actor.grid is grid
    assert actor.location == Location(2, 2)
    assert grid.get(Location(2, 2)) is actor
    assert_consistent(grid)


def test_place_twice_is_illegal():
    grid = BoundedGrid(5, 5)
    actor = make_actor("a")
    actor.place_in_grid(grid, Location(0, 0))

    with pytest.raises(IllegalStateError):
        actor.place_in_grid(grid, Location(1, 1))
    with pytest.raises(IllegalStateError):
        actor.place_in_grid(BoundedGrid(5, 5), Location(1, 1))


def test_place_on_occupied_cell_evicts_occupant():
    grid = BoundedGrid(5, 5)
    first = make_actor("first")
    second = make_actor("second")
    first.place_in_grid(grid, Location(3, 3))
    second.place_in_grid(grid, Location(3, 3))

    assert first.grid is None
    assert first.location is None
    assert grid.get(Location(3, 3)) is second
    assert len(grid) == 1
    assert_consistent(grid)


def test_remove_from_grid_clears_both_sides():
    grid = BoundedGrid(5, 5)
    actor = make_actor("a")
    actor.place_in_grid(grid, Location(1, 1))
    actor.remove_from_grid()

    assert actor.grid is None
    assert actor.location is None
    assert grid.get(Location(1, 1)) is None


def test_remove_unowned_is_illegal():
    with pytest.raises(IllegalStateError):
        make_actor("a").remove_from_grid()


def test_corruption_is_detected_on_remove_and_move():
    grid = BoundedGrid(5, 5)
    victim = make_actor("victim")
    intruder = make_actor("intruder")
    victim.place_in_grid(grid, Location(1, 1))

    # Bypass the protocol
    grid.put(Location(1, 1), intruder)

    with pytest.raises(InvariantViolationError) as excinfo:
        victim.remove_from_grid()
    assert excinfo.value.location == Location(1, 1)
    assert excinfo.value.expected is victim
    assert excinfo.value.found is intruder

    with pytest.raises(InvariantViolationError):
        victim.move_to(Location(1, 2))
    with pytest.raises(InvariantViolationError):
        victim.handle_cross_location(Location(1, 2))


def test_move_to_invalid_location_is_rejected():
    grid = BoundedGrid(5, 5)
    actor = make_actor("a")
    actor.place_in_grid(grid, Location(4, 4))

    with pytest.raises(InvalidLocationError):
        actor.move_to(Location(5, 4))
    # Still where it was
    assert grid.get(Location(4, 4)) is actor


def test_move_unowned_is_illegal():
    with pytest.raises(IllegalStateError):
        make_actor("a").move_to(Location(0, 0))


def test_move_onto_occupied_cell_evicts_occupant():
    grid = BoundedGrid(5, 5)
    a = make_actor("a")
    b = make_actor("b")
    a.place_in_grid(grid, Location(0, 0))
    b.place_in_grid(grid, Location(0, 1))

    assert a.move_to(Location(0, 1)) is True

    assert b.grid is None
    assert a.location == Location(0, 1)
    assert grid.get(Location(0, 1)) is a
    assert grid.get(Location(0, 0)) is None
    assert_consistent(grid)


def test_move_to_current_location_changes_nothing():
    grid = BoundedGrid(5, 5)
    actor = make_actor("a", costs=FREE, direction=EAST, color="red")
    actor.place_in_grid(grid, Location(2, 2))
    before = (actor.location, actor.direction, actor.color, actor.energy, grid.occupied_locations())

    actor.move_to(Location(2, 2))

    after = (actor.location, actor.direction, actor.color, actor.energy, grid.occupied_locations())
    assert before == after
    assert grid.get(Location(2, 2)) is actor


def test_move_charges_move_cost():
    grid = BoundedGrid(5, 5)
    actor = make_actor("a", energy=10, costs=CostConfig(move_cost_energy=3, eat_cost_energy=0))
    actor.place_in_grid(grid, Location(0, 0))
    actor.move_to(Location(0, 1))
    assert actor.energy == 7


def test_handle_cross_location_is_free():
    grid = BoundedGrid(5, 5)
    a = make_actor("a", energy=1, costs=CostConfig(move_cost_energy=5, eat_cost_energy=5))
    b = make_actor("b")
    a.place_in_grid(grid, Location(2, 2))
    b.place_in_grid(grid, Location(2, 3))

    a.handle_cross_location(Location(2, 3))

    assert a.energy == 1
    assert a.location == Location(2, 3)
    assert b.grid is None
    assert grid.get(Location(2, 2)) is None
    assert_consistent(grid)


def test_direction_is_normalized():
    actor = make_actor("a", direction=-90)
    assert actor.direction == 270
    actor.direction = 450
    assert actor.direction == 90


def test_back_reference_does_not_keep_grid_alive():
    grid = BoundedGrid(3, 3)
    actor = make_actor("a")
    actor.place_in_grid(grid, Location(0, 0))

    del grid
    gc.collect()

    assert actor.grid is None
    assert actor.location is None


def test_find_nearby_kinds_reports_flags_in_fixed_order():
    grid = BoundedGrid(3, 3)
    center = make_actor("center")
    center.place_in_grid(grid, Location(1, 1))
    make_actor("berry", kinds=[ActorKind.STRAWBERRY]).place_in_grid(grid, Location(0, 0))
    make_actor("beast", kinds=[ActorKind.MONSTER]).place_in_grid(grid, Location(2, 2))

    assert center.find_nearby_kinds() == (0, 1, 0, 1)
    assert center.find_nearby_kinds([]) == (0, 0, 0, 0)


def test_select_move_location_stays_when_boxed_in():
    grid = BoundedGrid(1, 1)
    actor = make_actor("a")
    actor.place_in_grid(grid, Location(0, 0))
    assert actor.get_move_locations() == []
    assert actor.select_move_location([]) == Location(0, 0)


def test_select_move_location_is_reproducible_with_seed():
    locs = [Location(0, c) for c in range(8)]
    first = make_actor("a", rng=random.Random(42))
    second = make_actor("b", rng=random.Random(42))

    picks_a = [first.select_move_location(locs) for _ in range(20)]
    picks_b = [second.select_move_location(locs) for _ in range(20)]
    assert picks_a == picks_b
    assert all(pick in locs for pick in picks_a)


def test_make_move_none_removes_actor():
    grid = BoundedGrid(3, 3)
    actor = make_actor("a")
    actor.place_in_grid(grid, Location(1, 1))
    actor.make_move(None)
    assert actor.grid is None
    assert len(grid) == 0


def test_random_act_moves_to_an_empty_neighbor():
    grid = BoundedGrid(3, 3)
    actor = make_actor("a", rng=random.Random(0))
    actor.place_in_grid(grid, Location(1, 1))
    blocker = make_actor("blocker")
    blocker.place_in_grid(grid, Location(0, 1))

    actor.random_act()

    assert actor.location != Location(1, 1)
    assert actor.location != Location(0, 1)
    assert blocker.grid is grid
    assert_consistent(grid)


def test_to_state_requires_grid_and_reports_fields():
    grid = BoundedGrid(3, 3)
    actor = make_actor("scout", energy=9, color="green", kinds=[ActorKind.CREATURE])

    with pytest.raises(IllegalStateError):
        actor.to_state()

    actor.place_in_grid(grid, Location(2, 1))
    state = actor.to_state()
    assert state.name == "scout"
    assert state.location == [2, 1]
    assert state.color == "green"
    assert state.energy == 9
    assert state.kinds == ["creature"]
    assert state.holding is None


def test_repr_mentions_location_and_energy():
    grid = BoundedGrid(3, 3)
    actor = make_actor("scout", energy=4)
    actor.place_in_grid(grid, Location(0, 2))
    text = repr(actor)
    assert text.startswith("scout[")
    assert "location=(0, 2)" in text
    assert "energy=4" in text
