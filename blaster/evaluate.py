"""
Evaluation runner for scripted and random policies
"""

import csv
import os
from typing import Callable, Dict, Optional

import numpy as np

from .config import GameConfig
from .entities import Direction
from .shooter_env import ACTION_CONTROLS, ShooterEnv

_INDEX = {control.value: i for i, control in enumerate(ACTION_CONTROLS)}


def _press(*names: str) -> np.ndarray:
    action = np.zeros(len(ACTION_CONTROLS), dtype=np.int64)
    for name in names:
        action[_INDEX[name]] = 1
    return action


def random_policy(env: ShooterEnv) -> np.ndarray:
    return env.action_space.sample()


def hunter_policy(env: ShooterEnv) -> np.ndarray:
    """
    Line up with the nearest target on one axis, turn to face it, then fire.

    Facing sticks when nothing is held, so the policy taps a direction to turn
    and releases it before firing instead of walking into the target.
    """
    state = env.controller.state
    shooter = state.shooter
    targets = env.controller.targets.live
    if not targets:
        return _press("fire")

    sx, sy = shooter.x + shooter.size / 2, shooter.y + shooter.size / 2
    nearest = min(targets, key=lambda t: (t.x - shooter.x) ** 2 + (t.y - shooter.y) ** 2)
    dx = nearest.x + nearest.size / 2 - sx
    dy = nearest.y + nearest.size / 2 - sy
    slack = shooter.size / 2

    if abs(dx) <= slack:
        want = Direction.UP if dy < 0 else Direction.DOWN
    elif abs(dy) <= slack:
        want = Direction.LEFT if dx < 0 else Direction.RIGHT
    elif abs(dx) < abs(dy):
        return _press("left" if dx < 0 else "right")
    else:
        return _press("up" if dy < 0 else "down")

    if tuple(shooter.facing) == (want,):
        return _press("fire")
    return _press(want.value)


POLICIES: Dict[str, Callable[[ShooterEnv], np.ndarray]] = {
    "random": random_policy,
    "hunter": hunter_policy,
}


def evaluate_policy(
    policy: str = "hunter",
    n_episodes: int = 10,
    seed: Optional[int] = None,
    csv_path: Optional[str] = None,
    config: Optional[GameConfig] = None,
    max_steps: Optional[int] = None,
    verbose: bool = True,
):
    """
    Evaluate a policy over several rounds

    Args:
        policy: Policy name ('random' or 'hunter')
        n_episodes: Number of episodes to run
        seed: Seed of the first episode; later episodes use seed + i
        csv_path: Optional CSV file for per-episode results
        config: Game configuration
        max_steps: Step limit per episode
        verbose: Print per-episode results

    Returns:
        Summary statistics
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy: {policy}. Choose from {sorted(POLICIES)}")
    act = POLICIES[policy]

    env_kwargs = {"config": config}
    if max_steps is not None:
        env_kwargs["max_steps"] = max_steps
    env = ShooterEnv(**env_kwargs)

    rows = []
    for ep in range(n_episodes):
        obs, info = env.reset(seed=None if seed is None else seed + ep)
        terminated = truncated = False
        total = 0.0
        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(act(env))
            total += reward

        row = {
            "episode": ep + 1,
            "reward": round(total, 4),
            "score": info["score"],
            "outcome": info["outcome"] or "timeout",
            "steps": info["step"],
            "seconds": info["seconds"],
        }
        rows.append(row)
        if verbose:
            print(f"Episode {row['episode']}: score={row['score']}  outcome={row['outcome']}  "
                  f"steps={row['steps']}  reward={row['reward']:.2f}")
    env.close()

    if csv_path:
        os.makedirs(os.path.dirname(csv_path) or ".", exist_ok=True)
        with open(csv_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()) if rows else ["episode"])
            writer.writeheader()
            writer.writerows(rows)
        if verbose:
            print(f"Results saved to {csv_path}")

    summary = {
        "policy": policy,
        "episodes": n_episodes,
        "win_rate": float(np.mean([r["outcome"] == "win" for r in rows])) if rows else 0.0,
        "mean_score": float(np.mean([r["score"] for r in rows])) if rows else 0.0,
        "mean_steps": float(np.mean([r["steps"] for r in rows])) if rows else 0.0,
    }
    if verbose:
        print(f"\n{policy}: win rate {summary['win_rate']:.2f}, "
              f"mean score {summary['mean_score']:.2f} +/- "
              f"{float(np.std([r['score'] for r in rows])) if rows else 0.0:.2f}")
    return summary
