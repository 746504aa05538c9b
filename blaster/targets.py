"""
Target subsystem
================
Targets appear on a random arena edge, wait out a short grace period and
then wander: every re-roll period they pick two random directions and step
along both on a short fixed period. A generation task adds one target per
period until the per-round total is reached.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from .config import GameConfig
from .entities import DIRECTIONS, Box, Direction, Target
from .errors import InvalidDirectionError, SpawnSaturationError
from .motion import Arena, move_step
from .port import TARGET, RenderPort
from .scheduler import Scheduler, Task
from .utils import boxes_overlap, random_between, random_choice, random_natural

logger = logging.getLogger(__name__)


class Wanderer:
    """Autonomous random walk of a single target"""

    def __init__(self, system: "TargetSystem", target: Target):
        self.system = system
        self.target = target
        self.reroll_task: Optional[Task] = None
        self.step_task: Optional[Task] = None

    def start(self):
        system = self.system
        if not self.target.alive or not system.state.running:
            return
        self.target.moving = True
        period = random_between(
            system.rng, system.config.wander_min_period, system.config.wander_max_period
        )
        self.reroll_task = system.scheduler.every(period, self.reroll, name=f"reroll-{self.target.id}")
        self.reroll()

    def reroll(self):
        system = self.system
        if not self.target.alive or not system.state.running:
            self.stop()
            return
        self.target.wander = (
            random_choice(system.rng, DIRECTIONS),
            random_choice(system.rng, DIRECTIONS),
        )
        if self.step_task is not None:
            self.step_task.cancel()
        self.step_task = system.scheduler.every(
            system.config.wander_step_period, self.step, name=f"wander-{self.target.id}"
        )

    def step(self):
        system = self.system
        if not self.target.alive or not system.state.running:
            self.stop()
            return
        moved = False
        for direction in self.target.wander:
            if move_step(system.arena, self.target, direction, system.config.target_tolerance):
                moved = True
        if moved:
            system.port.move_proxy(self.target)

    def stop(self):
        self.target.moving = False
        for task in (self.reroll_task, self.step_task):
            if task is not None:
                task.cancel()


class TargetSystem:
    def __init__(self, state, arena: Arena, config: GameConfig,
                 scheduler: Scheduler, port: RenderPort, rng):
        self.state = state
        self.arena = arena
        self.config = config
        self.scheduler = scheduler
        self.port = port
        self.rng = rng
        self.saturated = False
        self._generate_task: Optional[Task] = None
        self._grace_tasks: Dict[int, Task] = {}
        self._wanderers: Dict[int, Wanderer] = {}

    # ----------------------------
    # Queries
    # ----------------------------

    @property
    def live(self) -> List[Target]:
        return [t for t in self.state.targets if t.alive]

    def overlapping(self, box: Box) -> Optional[Target]:
        for target in self.live:
            if boxes_overlap(box, target.box):
                return target
        return None

    # ----------------------------
    # Generation
    # ----------------------------

    def start(self):
        self._generate_task = self.scheduler.every(
            self.config.generate_period, self.generate_tick, name="generate"
        )

    def stop(self):
        if self._generate_task is not None:
            self._generate_task.cancel()

    def generate_tick(self):
        if not self.state.running or self.state.targets_spawned >= self.config.max_targets:
            logger.debug("Target generation finished after %d targets", self.state.targets_spawned)
            self.stop()
            return
        if self.config.enforce_active_cap and len(self.live) >= self.config.max_active_targets:
            return
        try:
            self.spawn()
        except SpawnSaturationError as e:
            logger.warning("%s Stopping target generation for this round.", e)
            self.saturated = True
            self.stop()

    def edge_coordinate(self, direction: Optional[Direction] = None) -> Tuple[float, float]:
        """Random spawn position pinned to the arena edge picked by ``direction``"""
        half = self.config.target_size / 2
        low = -half
        if direction is None:
            direction = random_choice(self.rng, DIRECTIONS)
        if direction in (Direction.UP, Direction.DOWN):
            offset = low + random_natural(self.rng, 0, self.arena.width / half) * half
            if direction is Direction.UP:
                return offset, self.arena.height - half
            return offset, low
        if direction in (Direction.LEFT, Direction.RIGHT):
            offset = low + random_natural(self.rng, 0, self.arena.height / half) * half
            if direction is Direction.LEFT:
                return self.arena.width - half, offset
            return low, offset
        raise InvalidDirectionError(direction)

    def spawn(self) -> Target:
        """Place a new target on a free edge spot and schedule its wandering"""
        target = Target(x=0, y=0, size=self.config.target_size)
        others = self.live
        attempts = 0
        while True:
            if attempts >= self.config.spawn_attempts:
                raise SpawnSaturationError(attempts)
            target.x, target.y = self.edge_coordinate()
            attempts += 1
            if not any(boxes_overlap(target.box, other.box) for other in others):
                break

        target.visible = True
        self.state.targets.append(target)
        self.state.targets_spawned += 1
        self.port.add_proxy(TARGET, target)
        self._grace_tasks[target.id] = self.scheduler.after(
            self.config.spawn_grace, lambda: self._begin_wander(target), name=f"grace-{target.id}"
        )
        logger.debug("Spawned target %d at (%g, %g) after %d attempt(s)",
                     target.id, target.x, target.y, attempts)
        return target

    def _begin_wander(self, target: Target):
        self._grace_tasks.pop(target.id, None)
        wanderer = Wanderer(self, target)
        self._wanderers[target.id] = wanderer
        wanderer.start()

    # ----------------------------
    # Removal
    # ----------------------------

    def destroy(self, target: Target):
        target.alive = False
        target.moving = False
        if target in self.state.targets:
            self.state.targets.remove(target)
        grace = self._grace_tasks.pop(target.id, None)
        if grace is not None:
            grace.cancel()
        wanderer = self._wanderers.pop(target.id, None)
        if wanderer is not None:
            wanderer.stop()
        self.port.remove_proxy(target)

    def clear(self):
        for target in list(self.state.targets):
            self.destroy(target)
        self.port.clear_proxies(TARGET)
        self.saturated = False
