from __future__ import annotations

from .behaviors import BehaviorState, Dashing, Linear, Oscillating, Paused
from .runtime import HIT_FLASH_MS, Monster

__all__ = [
    "BehaviorState",
    "Dashing",
    "HIT_FLASH_MS",
    "Linear",
    "Monster",
    "Oscillating",
    "Paused",
]
