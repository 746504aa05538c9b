"""
Round controller
================
Owns the round lifecycle::

    idle --start--> running --(score reaches the cap)--> ended(win)
                            --(target touches shooter)--> ended(lose)
    ended --restart--> idle --start--> running

All per-round work runs as tasks on one ``Scheduler``. Ending a round
cancels every task and detaches input, so nothing moves afterwards. The
entities stay where they were until the next start clears them.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .bullets import BulletSystem
from .config import GameConfig
from .entities import Bullet, Control, Shooter, Target
from .errors import RoundStateError
from .motion import Arena
from .port import SHOOTER, RenderPort
from .scheduler import Scheduler
from .shooter import ShooterController
from .targets import TargetSystem
from .utils import format_clock, format_score

logger = logging.getLogger(__name__)

START_MESSAGE = "Press Start to play"
WIN_MESSAGE = "You win"
LOSE_MESSAGE = "You lose"


class RoundPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class Outcome(Enum):
    WIN = "win"
    LOSE = "lose"


@dataclass
class RoundState:
    """Everything that lives for exactly one round"""
    phase: RoundPhase = RoundPhase.IDLE
    outcome: Optional[Outcome] = None
    seconds: int = 0
    score: int = 0
    targets_spawned: int = 0
    shooter: Optional[Shooter] = None
    bullets: List[Bullet] = field(default_factory=list)
    targets: List[Target] = field(default_factory=list)
    held: Dict[Control, bool] = field(default_factory=lambda: {c: False for c in Control})

    @property
    def running(self) -> bool:
        return self.phase is RoundPhase.RUNNING

    def reset(self):
        self.outcome = None
        self.seconds = 0
        self.score = 0
        self.targets_spawned = 0
        self.bullets.clear()
        self.targets.clear()
        self.held = {c: False for c in Control}


class RoundController:
    def __init__(
        self,
        port: RenderPort,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        self.port = port
        self.config = (config or GameConfig()).validate()
        self.rng = rng if rng is not None else random.Random()
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.state = RoundState()
        self.arena: Optional[Arena] = None
        self.shooter: Optional[ShooterController] = None
        self.targets: Optional[TargetSystem] = None
        self.bullets: Optional[BulletSystem] = None
        self._listening = False
        self.rounds_played = 0

        self.port.show_result(START_MESSAGE, "Start")

    @property
    def phase(self) -> RoundPhase:
        return self.state.phase

    @property
    def listening(self) -> bool:
        return self._listening

    # ----------------------------
    # Transitions
    # ----------------------------

    def start(self):
        """idle -> running: reset everything and start all round tasks"""
        if self.state.phase is not RoundPhase.IDLE:
            raise RoundStateError(f"Cannot start a round while {self.state.phase.value}")

        self.scheduler.cancel_all()
        self.arena = Arena(*self.port.arena_size())
        self._clear_entities()
        self.state.reset()
        self._build_systems()
        self.shooter.reset()

        self.port.set_score(format_score(0))
        self.port.set_timer(format_clock(0))
        self.port.hide_result()

        self.state.phase = RoundPhase.RUNNING
        self.shooter.start()
        self.targets.start()
        self.bullets.start()
        self.scheduler.every(self.config.timer_period, self._timer_tick, name="timer")
        self.scheduler.every(self.config.poll_period, self.check_termination, name="poll")
        self._listening = True
        self.port.start_listening()

        self.rounds_played += 1
        logger.info("Round %d started in a %dx%d arena",
                    self.rounds_played, self.arena.width, self.arena.height)

    def restart(self):
        """ended -> idle -> running"""
        if self.state.phase is not RoundPhase.ENDED:
            raise RoundStateError(f"Cannot restart a round while {self.state.phase.value}")
        self.state.phase = RoundPhase.IDLE
        self.start()

    def press_start(self):
        """The Start/Restart button"""
        if self.state.phase is RoundPhase.IDLE:
            self.start()
        elif self.state.phase is RoundPhase.ENDED:
            self.restart()

    def end(self, outcome: Outcome):
        """running -> ended. Later calls are ignored."""
        if self.state.phase is not RoundPhase.RUNNING:
            return
        self.state.phase = RoundPhase.ENDED
        self.state.outcome = outcome
        self.scheduler.cancel_all()
        self._listening = False
        self.port.stop_listening()
        self.port.show_result(WIN_MESSAGE if outcome is Outcome.WIN else LOSE_MESSAGE, "Restart")
        logger.info("Round %d ended (%s): score %d, %d targets spawned, %ds elapsed",
                    self.rounds_played, outcome.value, self.state.score,
                    self.state.targets_spawned, self.state.seconds)

    # ----------------------------
    # Driving
    # ----------------------------

    def advance(self, dt_ms: float):
        self.scheduler.advance(dt_ms)

    def handle_control(self, control: Control, pressed: bool) -> bool:
        """Input listener. Ignored unless the round is listening."""
        if not self._listening:
            return False
        self.shooter.set_held(control, pressed)
        return True

    def check_termination(self):
        if not self.state.running:
            return
        if self.state.score >= self.config.max_targets:
            self.end(Outcome.WIN)
            return
        if self.targets.overlapping(self.state.shooter.box) is not None:
            self.end(Outcome.LOSE)

    def _timer_tick(self):
        if not self.state.running:
            return
        self.state.seconds += 1
        self.port.set_timer(format_clock(self.state.seconds))

    # ----------------------------
    # Internals
    # ----------------------------

    def _build_systems(self):
        args = (self.state, self.arena, self.config, self.scheduler, self.port)
        self.shooter = ShooterController(*args)
        self.targets = TargetSystem(*args, rng=self.rng)
        self.bullets = BulletSystem(*args, targets=self.targets)

    def _clear_entities(self):
        if self.bullets is not None:
            self.bullets.clear()
        if self.targets is not None:
            self.targets.clear()
        self.port.clear_proxies(SHOOTER)
