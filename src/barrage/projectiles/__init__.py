from __future__ import annotations

from .patterns import Barrel, circle_angles, fan_angles, player_spread_barrels
from .system import BulletSystem
from .types import Owner, Projectile, ProjectileListener, TurnMode

__all__ = [
    "Barrel",
    "BulletSystem",
    "Owner",
    "Projectile",
    "ProjectileListener",
    "TurnMode",
    "circle_angles",
    "fan_angles",
    "player_spread_barrels",
]
