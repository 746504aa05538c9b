"""
ShooterEnv - headless driver for a round of target blaster
-----------------------------------------------------------
- Gymnasium API around a RoundController and an in-memory SceneBuffer
- Action: which controls are held this step, MultiDiscrete([2, 2, 2, 2, 2])
  = [up, down, left, right, fire]
- Each step advances dt_ms of virtual time, so every task keeps its own period
- Vector observation: shooter state + top-K nearest targets
- Episode ends when the round is won or lost

Quick test:
    python -m blaster.shooter_env
"""

from __future__ import annotations

import random
import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import ENV_CONFIG, REWARD_CONFIG, GameConfig
from .entities import Control
from .port import BULLET, SHOOTER, TARGET, SceneBuffer
from .round import Outcome, RoundController
from .utils import clamp, normalize, seed_everything

ACTION_CONTROLS = (Control.UP, Control.DOWN, Control.LEFT, Control.RIGHT, Control.FIRE)

# Colors (RGB)
BG = (18, 18, 22)
SHOOTER_C = (80, 200, 120)
TARGET_C = (220, 80, 80)
BULLET_C = (180, 180, 220)


def render_frame(scene: SceneBuffer) -> np.ndarray:
    """Rasterize the scene into an RGB array, one pixel per arena unit"""
    frame = np.empty((scene.height, scene.width, 3), dtype=np.uint8)
    frame[:, :] = BG
    colors = {TARGET: TARGET_C, BULLET: BULLET_C, SHOOTER: SHOOTER_C}
    for kind in (TARGET, BULLET, SHOOTER):
        for entity in scene.entities(kind):
            if getattr(entity, "visible", True) is False:
                continue
            box = entity.box
            x0 = int(clamp(box.left, 0, scene.width))
            x1 = int(clamp(box.right, 0, scene.width))
            y0 = int(clamp(box.top, 0, scene.height))
            y1 = int(clamp(box.bottom, 0, scene.height))
            if x1 > x0 and y1 > y0:
                frame[y0:y1, x0:x1] = colors[kind]
    return frame


class ShooterEnv(gym.Env):
    """Target blaster round as a gymnasium environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        config: Optional[GameConfig] = None,
        dt_ms: float = ENV_CONFIG["dt_ms"],
        max_steps: int = ENV_CONFIG["max_steps"],
        k_targets: int = ENV_CONFIG["k_targets"],
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.config = (config or GameConfig()).validate()
        self.dt_ms = dt_ms
        self.max_steps = max_steps
        self.k_targets = k_targets

        self.action_space = spaces.MultiDiscrete([2] * len(ACTION_CONTROLS))

        # Shooter: pos(2) facing(2) score(1) spawned(1)
        # Each target: rel pos(2)
        obs_dim = 2 + 2 + 1 + 1 + self.k_targets * 2
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.scene: SceneBuffer = None  # type: ignore
        self.controller: RoundController = None  # type: ignore
        self._step_count = 0
        self._last_score = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self._step_count = 0
        self._last_score = 0

        # A fresh controller per episode; the round starts through the usual reset path
        self.scene = SceneBuffer(self.config.width, self.config.height)
        self.controller = RoundController(self.scene, self.config, rng=random.Random(seed))
        self.controller.start()

        return self._get_obs(), self._get_info()

    def step(self, action):
        state = self.controller.state
        for control, held in zip(ACTION_CONTROLS, action):
            held = bool(int(held))
            if state.held.get(control, False) != held:
                self.controller.handle_control(control, held)

        self.controller.advance(self.dt_ms)

        reward = self._compute_reward()
        self._last_score = state.score

        terminated = not state.running
        self._step_count += 1
        truncated = self._step_count >= self.max_steps and not terminated

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        state = self.controller.state
        shooter = state.shooter
        w, h = self.config.width, self.config.height

        fx = sum(d.sign for d in shooter.facing if d.axis == "x")
        fy = sum(d.sign for d in shooter.facing if d.axis == "y")
        fx, fy = normalize(fx, fy)

        max_targets = max(1, self.config.max_targets)
        obs_parts = [
            clamp(shooter.x / w * 2 - 1, -1, 1),
            clamp(shooter.y / h * 2 - 1, -1, 1),
            fx, fy,
            state.score / max_targets * 2 - 1,
            state.targets_spawned / max_targets * 2 - 1,
        ]

        # Targets: top-K nearest
        targets_sorted = sorted(
            self.controller.targets.live,
            key=lambda t: (t.x - shooter.x) ** 2 + (t.y - shooter.y) ** 2
        )
        for i in range(self.k_targets):
            if i < len(targets_sorted):
                t = targets_sorted[i]
                obs_parts += [
                    clamp((t.x - shooter.x) / w, -1, 1),
                    clamp((t.y - shooter.y) / h, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        state = self.controller.state
        reward = REWARD_CONFIG["R_KILL"] * (state.score - self._last_score)
        reward -= REWARD_CONFIG["R_TIME"]
        if state.outcome is Outcome.WIN:
            reward += REWARD_CONFIG["R_WIN"]
        elif state.outcome is Outcome.LOSE:
            reward -= REWARD_CONFIG["R_LOSE"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        state = self.controller.state
        return {
            "score": state.score,
            "targets_spawned": state.targets_spawned,
            "num_targets": len(state.targets),
            "num_bullets": len(state.bullets),
            "seconds": state.seconds,
            "phase": state.phase.value,
            "outcome": state.outcome.value if state.outcome else None,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return render_frame(self.scene)

        if self._window is None:
            # Imported here so headless use never needs a display
            from .window import ArenaWindow
            self._window = ArenaWindow(self.controller, interactive=False)
        self._window.controller = self.controller
        self._window.on_draw()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42, config: Optional[GameConfig] = None):
    """Run a random episode for testing"""
    env = ShooterEnv(render_mode="human" if render else None, config=config)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... Close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            # Keep the window responsive and show the frame
            env._window.dispatch_events()
            env._window.flip()
            time.sleep(env.dt_ms / 1000)

    print(f"Random episode return: {total:.3f}  score: {info['score']}  "
          f"outcome: {info['outcome']}  steps: {info['step']}")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
