"""
Game entity dataclasses and the direction vocabulary
"""

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

_entity_ids = itertools.count(1)


class Direction(Enum):
    """Movement direction. Definition order is the canonical order."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def axis(self) -> str:
        return "y" if self in (Direction.UP, Direction.DOWN) else "x"

    @property
    def sign(self) -> int:
        return -1 if self in (Direction.UP, Direction.LEFT) else 1

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)


class Control(Enum):
    """Player controls reported by the input port"""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    FIRE = "fire"

    @property
    def direction(self) -> Optional[Direction]:
        if self is Control.FIRE:
            return None
        return Direction(self.value)


@dataclass(frozen=True)
class Box:
    """Axis-aligned bounding box, y grows downward"""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(eq=False)
class Entity:
    """Square entity positioned by its top-left corner"""
    x: float
    y: float
    size: float = 20.0
    id: int = field(default_factory=lambda: next(_entity_ids))

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.size, self.size)


@dataclass(eq=False)
class Shooter(Entity):
    """Player-controlled shooter"""
    facing: Tuple[Direction, ...] = (Direction.UP,)

    @property
    def facing_label(self) -> str:
        return "-".join(d.value for d in self.facing)


@dataclass(eq=False)
class Bullet(Entity):
    """Projectile travelling along a fixed list of directions"""
    size: float = 10.0
    directions: Tuple[Direction, ...] = ()
    alive: bool = True


@dataclass(eq=False)
class Target(Entity):
    """Randomly wandering target"""
    wander: Tuple[Direction, ...] = ()
    alive: bool = True
    moving: bool = False  # False during the spawn grace period
    visible: bool = False
