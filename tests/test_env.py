from __future__ import annotations

import numpy as np

from blaster.config import GameConfig
from blaster.shooter_env import SHOOTER_C, ShooterEnv


def test_reset_returns_valid_observation() -> None:
    env = ShooterEnv()
    obs, info = env.reset(seed=0)
    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["phase"] == "running"
    assert info["score"] == 0
    assert info["outcome"] is None
    # Facing up
    assert obs[2] == 0.0 and obs[3] == -1.0


def test_step_advances_virtual_time() -> None:
    env = ShooterEnv(dt_ms=30)
    env.reset(seed=0)
    for _ in range(34):
        obs, reward, terminated, truncated, info = env.step(np.zeros(5, dtype=np.int64))
    assert env.controller.scheduler.now == 34 * 30
    assert info["seconds"] == 1
    assert env.observation_space.contains(obs)
    assert isinstance(reward, float)


def test_held_controls_follow_action() -> None:
    env = ShooterEnv()
    env.reset(seed=0)
    env.step(np.array([0, 0, 1, 0, 1]))
    state = env.controller.state
    assert state.shooter.facing_label == "left"
    env.step(np.array([0, 0, 1, 0, 1]))
    env.step(np.array([0, 0, 1, 0, 1]))
    assert state.shooter.x < 190
    env.step(np.zeros(5, dtype=np.int64))
    assert not any(state.held.values())


def test_same_seed_same_episode() -> None:
    actions = [np.array([i % 2, 0, (i // 3) % 2, 0, 1]) for i in range(400)]

    def run():
        env = ShooterEnv()
        env.reset(seed=21)
        out = []
        for a in actions:
            obs, reward, terminated, truncated, info = env.step(a)
            out.append(obs)
            if terminated or truncated:
                break
        return np.stack(out)

    np.testing.assert_array_equal(run(), run())


def test_episode_terminates_or_truncates() -> None:
    env = ShooterEnv(max_steps=200)
    env.reset(seed=1)
    env.action_space.seed(1)
    done = False
    steps = 0
    while not done:
        _, _, terminated, truncated, info = env.step(env.action_space.sample())
        done = terminated or truncated
        steps += 1
    assert steps <= 200
    if info["phase"] == "ended":
        assert info["outcome"] in ("win", "lose")


def test_win_rewards_bonus() -> None:
    env = ShooterEnv(config=GameConfig(generate_period=10 ** 9))
    env.reset(seed=0)
    env.controller.state.score = env.config.max_targets
    total = 0.0
    terminated = False
    for _ in range(4):
        _, reward, terminated, _, info = env.step(np.zeros(5, dtype=np.int64))
        total += reward
        if terminated:
            break
    assert terminated
    assert info["outcome"] == "win"
    assert total > 5.0


def test_rgb_array_render() -> None:
    env = ShooterEnv(render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (400, 400, 3)
    assert frame.dtype == np.uint8
    assert tuple(frame[200, 200]) == SHOOTER_C
