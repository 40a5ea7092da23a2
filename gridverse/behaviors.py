"""
Capability tags and behavior strategies for actors.

Actors are not subclassed per kind. Instead each actor carries a set of
``ActorKind`` tags (what it IS) and an optional ``Behavior`` (what it DOES on
its turn). Kind checks are tag-set membership tests:

    if actor.kinds & FOOD_KINDS:
        ...

Behaviors are plain strategy objects injected into actors, so the same actor
type can model plants, foragers and predators, and an external trainer can
swap behaviors without touching grid code.

Every behavior mutates the world only through the actor protocol
(``move_to``, ``handle_cross_location``, ``make_move``,
``spend_energy_and_check``), never through ``Grid.put`` / ``Grid.remove``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, FrozenSet, Iterable, List

from .config import ActionKind

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .actor import Actor
    from .world import ActorWorld


class ActorKind(str, Enum):
    """Capability tags. Order here is the order of ``Actor.find_nearby_kinds``."""

    MUSHROOM = "mushroom"
    STRAWBERRY = "strawberry"
    CREATURE = "creature"
    MONSTER = "monster"


FOOD_KINDS: FrozenSet[ActorKind] = frozenset({ActorKind.MUSHROOM, ActorKind.STRAWBERRY})


class Behavior(ABC):
    """Strategy invoked once per step for each live actor that carries it."""

    @abstractmethod
    def act(self, actor: "Actor", world: "ActorWorld") -> None:
        """Take this actor's turn.

        Called only while ``actor.grid is world.grid``. The actor may die part
        way through (energy exhaustion); implementations must stop as soon as a
        costed call reports the actor killed.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Stationary(Behavior):
    """Never acts. Used for plants and other passive occupants."""

    def act(self, actor: "Actor", world: "ActorWorld") -> None:
        return None


class RandomWalk(Behavior):
    """Move to a uniformly random empty neighbor, or stay put if boxed in."""

    def act(self, actor: "Actor", world: "ActorWorld") -> None:
        actor.random_act()


class Vanish(Behavior):
    """Leave the grid on the first turn."""

    def act(self, actor: "Actor", world: "ActorWorld") -> None:
        actor.make_move(None)


def _adjacent_with_kinds(actor: "Actor", kinds: FrozenSet[ActorKind]) -> List["Actor"]:
    return [other for other in actor.get_actors() if other.kinds & kinds]


class Forager(Behavior):
    """Eat adjacent food, otherwise wander.

    Eating charges the EAT cost instead of the MOVE cost: the forager spends
    its eat energy, absorbs the food's energy and relocates onto the food's
    cell with ``handle_cross_location`` (which evicts the food). If the eat
    cost kills the forager the meal is abandoned.
    """

    def __init__(self, food: Iterable[ActorKind] = FOOD_KINDS) -> None:
        self.food: FrozenSet[ActorKind] = frozenset(food)

    def act(self, actor: "Actor", world: "ActorWorld") -> None:
        meals = _adjacent_with_kinds(actor, self.food)
        if not meals:
            actor.random_act()
            return

        meal = meals[0]
        target = meal.location
        actor.direction = actor.location.direction_toward(target)
        if actor.spend_energy_and_check(ActionKind.EAT):
            return
        actor.energy += max(meal.energy, 0)
        actor.handle_cross_location(target)

    def __repr__(self) -> str:
        kinds = ", ".join(sorted(kind.value for kind in self.food))
        return f"Forager(food={{{kinds}}})"


class Hunter(Behavior):
    """Move onto adjacent prey (evicting it), otherwise wander."""

    def __init__(self, prey: Iterable[ActorKind] = (ActorKind.CREATURE,)) -> None:
        self.prey: FrozenSet[ActorKind] = frozenset(prey)

    def act(self, actor: "Actor", world: "ActorWorld") -> None:
        targets = _adjacent_with_kinds(actor, self.prey)
        if not targets:
            actor.random_act()
            return

        target = targets[0].location
        actor.direction = actor.location.direction_toward(target)
        actor.move_to(target)

    def __repr__(self) -> str:
        kinds = ", ".join(sorted(kind.value for kind in self.prey))
        return f"Hunter(prey={{{kinds}}})"
