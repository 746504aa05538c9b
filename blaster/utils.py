"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Optional, Sequence, Tuple, TypeVar
import numpy as np

T = TypeVar("T")


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def boxes_overlap(a, b) -> bool:
    """Check if two axis-aligned boxes overlap (touching edges do not count)"""
    return (
        a.left < b.right
        and a.right > b.left
        and a.top < b.bottom
        and a.bottom > b.top
    )


def random_choice(rng, values: Sequence[T]) -> T:
    """Pick a random value from a sequence using ``rng.random()``"""
    return values[int(rng.random() * len(values))]


def random_natural(rng, lo: int, hi: int) -> int:
    """Random integer in ``[lo, hi)``"""
    return int(rng.random() * (hi - lo) + lo)


def random_between(rng, lo: float, hi: float) -> float:
    """Random float in ``[lo, hi)``"""
    return lo + rng.random() * (hi - lo)


def format_score(score: int) -> str:
    """Zero-padded score for the HUD"""
    return str(score).zfill(3)


def format_clock(seconds: int) -> str:
    """Elapsed seconds as HH:MM:SS; hours wrap at 24 like a wall clock"""
    hours = (seconds // 3600) % 24
    minutes = (seconds // 60) % 60
    return f"{hours:02d}:{minutes:02d}:{seconds % 60:02d}"


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l
