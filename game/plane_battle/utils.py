"""
Utility functions for game mechanics
"""

from __future__ import annotations
import random
from typing import NamedTuple, Optional
import numpy as np


class Rect(NamedTuple):
    """Axis-aligned rectangle, top-left corner + size (y grows downward)"""
    x: float
    y: float
    w: float
    h: float


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def overlaps(a: Rect, b: Rect) -> bool:
    """Check if two rectangles overlap (touching edges do not count)"""
    return (
        a.x < b.x + b.w and
        a.x + a.w > b.x and
        a.y < b.y + b.h and
        a.y + a.h > b.y
    )


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
