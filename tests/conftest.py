from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blaster.config import GameConfig  # noqa: E402
from blaster.port import SceneBuffer  # noqa: E402
from blaster.round import RoundController  # noqa: E402


class ScriptedRandom:
    """Stand-in for random.Random that replays fixed values, then repeats the last"""

    def __init__(self, *values: float):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def scene(config: GameConfig) -> SceneBuffer:
    return SceneBuffer(config.width, config.height)


@pytest.fixture
def controller(scene: SceneBuffer, config: GameConfig) -> RoundController:
    ctl = RoundController(scene, config, rng=random.Random(1234))
    ctl.start()
    return ctl


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def make_controller():
    def _make(seed: int = 1234, start: bool = True, spawn: bool = True, **overrides) -> RoundController:
        if not spawn:
            # Long enough that no target appears on its own
            overrides.setdefault("generate_period", 10 ** 9)
        config = GameConfig().replace(**overrides)
        scene = SceneBuffer(config.width, config.height)
        ctl = RoundController(scene, config, rng=random.Random(seed))
        if start:
            ctl.start()
        return ctl

    return _make
