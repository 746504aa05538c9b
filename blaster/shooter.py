"""
Shooter controller: held-direction input, per-tick motion and facing
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .config import GameConfig
from .entities import DIRECTIONS, Control, Direction, Shooter
from .motion import Arena, move_step
from .port import SHOOTER, RenderPort
from .scheduler import Scheduler, Task


def derive_facing(held: Iterable[Direction]) -> Optional[Tuple[Direction, ...]]:
    """
    Join held directions in canonical order into a facing.
    Returns None when nothing is held or an opposite pair is held, in which
    case the caller keeps the previous facing.
    """
    held = set(held)
    facing = tuple(d for d in DIRECTIONS if d in held)
    if not facing:
        return None
    if any(d.opposite in held for d in facing):
        return None
    return facing


class ShooterController:
    def __init__(self, state, arena: Arena, config: GameConfig,
                 scheduler: Scheduler, port: RenderPort):
        self.state = state
        self.arena = arena
        self.config = config
        self.scheduler = scheduler
        self.port = port
        self._task: Optional[Task] = None

    @property
    def shooter(self) -> Shooter:
        return self.state.shooter

    def reset(self) -> Shooter:
        """Place a fresh shooter in the middle of the arena, facing up"""
        size = self.config.shooter_size
        self.state.shooter = Shooter(
            x=(self.arena.width - size) // 2,
            y=(self.arena.height - size) // 2,
            size=size,
        )
        self.port.add_proxy(SHOOTER, self.state.shooter)
        return self.state.shooter

    def start(self):
        self._task = self.scheduler.every(self.config.shooter_period, self.tick, name="shooter")

    def stop(self):
        if self._task is not None:
            self._task.cancel()

    def held_directions(self) -> List[Direction]:
        return [d for d in DIRECTIONS if self.state.held.get(Control(d.value), False)]

    def set_held(self, control: Control, pressed: bool):
        self.state.held[control] = pressed
        if control.direction is not None:
            self.update_facing()

    def update_facing(self):
        facing = derive_facing(self.held_directions())
        if facing is not None:
            self.shooter.facing = facing

    def tick(self):
        if not self.state.running:
            return
        moved = False
        for direction in self.held_directions():
            # Opposite directions are both attempted and cancel out
            if move_step(self.arena, self.shooter, direction, self.config.shooter_tolerance):
                moved = True
        if moved:
            self.port.move_proxy(self.shooter)
