from __future__ import annotations

from .clock import FixedStepClock
from .world import DEATH_FADE_MS, MonsterRecord, ProjectileRecord, World, WorldSnapshot

__all__ = [
    "DEATH_FADE_MS",
    "FixedStepClock",
    "MonsterRecord",
    "ProjectileRecord",
    "World",
    "WorldSnapshot",
]
