"""
Game configuration
All periods are in milliseconds of virtual time, sizes in arena pixels.
"""

import json
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping

from .errors import ConfigError

TARGET_SIZE = 20
MAX_TARGETS = 20
MAX_ACTIVE_TARGETS = 15


@dataclass(frozen=True)
class GameConfig:
    # Arena
    width: int = 400
    height: int = 400

    # Entities
    shooter_size: int = 20
    bullet_size: int = 10
    target_size: int = TARGET_SIZE

    # How far past the arena edge each kind may travel
    shooter_tolerance: float = 0.0
    bullet_tolerance: float = 10.0
    target_tolerance: float = 10.0

    # Population
    max_targets: int = MAX_TARGETS
    max_active_targets: int = MAX_ACTIVE_TARGETS
    enforce_active_cap: bool = True
    spawn_attempts: int = 100

    # Task periods
    shooter_period: float = 60
    fire_period: float = 100
    bullet_period: float = 30
    generate_period: float = 1000
    spawn_grace: float = 800
    wander_step_period: float = 200
    wander_min_period: float = 1000
    wander_max_period: float = 2000
    timer_period: float = 1000
    poll_period: float = 100

    def validate(self) -> "GameConfig":
        for name in ("width", "height", "shooter_size", "bullet_size", "target_size",
                     "spawn_attempts", "shooter_period", "fire_period", "bullet_period",
                     "generate_period", "wander_step_period", "wander_min_period",
                     "timer_period", "poll_period"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("shooter_tolerance", "bullet_tolerance", "target_tolerance",
                     "spawn_grace", "max_targets"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative, got {getattr(self, name)}")
        if self.wander_min_period > self.wander_max_period:
            raise ConfigError("wander_min_period is larger than wander_max_period")
        if self.max_active_targets > self.max_targets:
            raise ConfigError("max_active_targets cannot exceed max_targets")
        if self.enforce_active_cap and self.max_targets > 0 and self.max_active_targets <= 0:
            raise ConfigError("max_active_targets must be positive while the active cap is enforced")
        if self.shooter_size > min(self.width, self.height):
            raise ConfigError("shooter does not fit in the arena")
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**dict(data)).validate()

    @classmethod
    def from_json(cls, path: str) -> "GameConfig":
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must contain a JSON object")
        return cls.from_dict(data)

    def replace(self, **overrides) -> "GameConfig":
        data = asdict(self)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return GameConfig.from_dict(data)


# Environment parameters
ENV_CONFIG: Dict[str, Any] = {
    "dt_ms": 30,
    "max_steps": 4000,  # 120s at 30ms per step
    "k_targets": 5,
}

# Reward shaping
REWARD_CONFIG = {
    "R_KILL": 1.0,   # Reward per destroyed target
    "R_WIN": 10.0,   # Bonus for clearing every target
    "R_LOSE": 10.0,  # Penalty for being touched
    "R_TIME": 0.001, # Small time penalty
}
