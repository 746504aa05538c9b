"""
Entity motion model shared by the shooter, bullets and targets.

Every entity moves in half-size steps along one axis at a time. A step is
allowed only if the entity ends up inside ``[-tolerance, extent - size +
tolerance]`` on that axis, so nothing ever leaves the arena by more than
its tolerance margin.
"""

from dataclasses import dataclass

from .entities import Direction, Entity
from .errors import InvalidDirectionError


@dataclass(frozen=True)
class Arena:
    """Fixed rectangular play area"""
    width: int
    height: int

    def extent(self, axis: str) -> int:
        return self.width if axis == "x" else self.height


def step_size(entity: Entity) -> float:
    return entity.size / 2


def can_move(arena: Arena, entity: Entity, direction: Direction, tolerance: float = 10.0) -> bool:
    """Check if one step in ``direction`` keeps the entity within bounds"""
    if not isinstance(direction, Direction):
        raise InvalidDirectionError(direction)
    axis = direction.axis
    new_pos = getattr(entity, axis) + step_size(entity) * direction.sign
    return -tolerance <= new_pos <= arena.extent(axis) - entity.size + tolerance


def move_step(arena: Arena, entity: Entity, direction: Direction, tolerance: float = 10.0) -> bool:
    """Move the entity one step if allowed. Returns whether it moved."""
    if not can_move(arena, entity, direction, tolerance):
        return False
    axis = direction.axis
    setattr(entity, axis, getattr(entity, axis) + step_size(entity) * direction.sign)
    return True
