"""
Bullet subsystem
Bullets leave the shooter along its facing at the time of firing and keep
that heading until they run out of arena or hit a target.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from .config import GameConfig
from .entities import Bullet, Control
from .motion import Arena, move_step
from .port import BULLET, RenderPort
from .scheduler import Scheduler, Task
from .targets import TargetSystem
from .utils import boxes_overlap, format_score

logger = logging.getLogger(__name__)


class BulletSystem:
    def __init__(self, state, arena: Arena, config: GameConfig,
                 scheduler: Scheduler, port: RenderPort, targets: TargetSystem):
        self.state = state
        self.arena = arena
        self.config = config
        self.scheduler = scheduler
        self.port = port
        self.targets = targets
        self._fire_task: Optional[Task] = None
        self._tasks: Dict[int, Task] = {}

    def start(self):
        # Fire rate is bound to this period, not to key repeat
        self._fire_task = self.scheduler.every(self.config.fire_period, self.fire_tick, name="fire")

    def stop(self):
        if self._fire_task is not None:
            self._fire_task.cancel()

    def fire_tick(self):
        if self.state.running and self.state.held.get(Control.FIRE, False):
            self.spawn()

    def spawn(self) -> Bullet:
        shooter = self.state.shooter
        bullet = Bullet(
            x=shooter.x,
            y=shooter.y,
            size=self.config.bullet_size,
            directions=tuple(shooter.facing),
        )
        self.state.bullets.append(bullet)
        self.port.add_proxy(BULLET, bullet)
        self._tasks[bullet.id] = self.scheduler.every(
            self.config.bullet_period, lambda: self.advance(bullet), name=f"bullet-{bullet.id}"
        )
        return bullet

    def advance(self, bullet: Bullet):
        """One flight tick: move, then check for a hit"""
        if not bullet.alive or not self.state.running:
            return
        moving = True
        for direction in bullet.directions:
            moving = move_step(self.arena, bullet, direction, self.config.bullet_tolerance)
            if not moving:
                break
        if moving:
            self.port.move_proxy(bullet)

        hit = self.targets.overlapping(bullet.box)
        if hit is not None:
            self.targets.destroy(hit)
            self.state.score += 1
            self.port.set_score(format_score(self.state.score))
            logger.debug("Bullet %d destroyed target %d, score %d", bullet.id, hit.id, self.state.score)
            moving = False

        if not moving:
            self.remove(bullet)

    def remove(self, bullet: Bullet):
        bullet.alive = False
        if bullet in self.state.bullets:
            self.state.bullets.remove(bullet)
        task = self._tasks.pop(bullet.id, None)
        if task is not None:
            task.cancel()
        self.port.remove_proxy(bullet)

    def clear(self):
        for bullet in list(self.state.bullets):
            self.remove(bullet)
        self.port.clear_proxies(BULLET)
