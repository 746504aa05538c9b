"""Target blaster - single-screen arcade shooter simulation"""

from .config import GameConfig
from .entities import Bullet, Control, Direction, Shooter, Target
from .errors import (
    BlasterError, ConfigError, InvalidDirectionError, RoundStateError, SpawnSaturationError,
)
from .port import RenderPort, SceneBuffer
from .round import Outcome, RoundController, RoundPhase, RoundState
from .scheduler import Scheduler
from .shooter_env import ShooterEnv, run_random_episode

__all__ = [
    'GameConfig', 'Bullet', 'Control', 'Direction', 'Shooter', 'Target',
    'BlasterError', 'ConfigError', 'InvalidDirectionError', 'RoundStateError',
    'SpawnSaturationError', 'RenderPort', 'SceneBuffer', 'Outcome', 'RoundController',
    'RoundPhase', 'RoundState', 'Scheduler', 'ShooterEnv', 'run_random_episode',
]
