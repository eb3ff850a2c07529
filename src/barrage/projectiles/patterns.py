from __future__ import annotations

"""Angle generators for the canonical bullet patterns.

Angles are radians in screen space (x right, y down), so 0 points right and
`math.pi` points left toward the player side.
"""

from dataclasses import dataclass
import math

from kiln.math import deg_to_rad

__all__ = [
    "Barrel",
    "FAN_CENTER",
    "SPREAD_BARRELS",
    "SPREAD_FIRE_STEP_DEG",
    "SPREAD_SIDE_DEG",
    "SPREAD_TURN_STEP_DEG",
    "circle_angles",
    "fan_angles",
    "player_spread_barrels",
]

FAN_CENTER = math.pi

SPREAD_BARRELS = 7
SPREAD_FIRE_STEP_DEG = 10.0
SPREAD_TURN_STEP_DEG = 1.0
SPREAD_TURN_AFTER_UNITS = 2.0
SPREAD_SIDE_DEG = 35.0
SPREAD_SIDE_TURN_DEG = 15.0
SPREAD_SIDE_TURN_AFTER_UNITS = 4.0


@dataclass(frozen=True, slots=True)
class Barrel:
    angle: float
    turn_after_units: float = 0.0
    turn_angle: float = 0.0


def circle_angles(count: int) -> list[float]:
    if count <= 0:
        return []
    step = (math.pi * 2.0) / count
    return [step * i for i in range(count)]


def fan_angles(spread_deg: float, count: int) -> list[float]:
    """Evenly spaced angles across an arc centered on the leftward direction.

    A single projectile goes straight down the center of the arc.
    """

    if count <= 0:
        return []
    if count == 1:
        return [FAN_CENTER]
    spread = deg_to_rad(spread_deg)
    start = FAN_CENTER - spread / 2.0
    step = spread / (count - 1)
    angles = [start + step * i for i in range(count)]
    # Pin the last barrel to the arc endpoint instead of the accumulated sum.
    angles[-1] = FAN_CENTER + spread / 2.0
    return angles


def player_spread_barrels() -> list[Barrel]:
    """Seven main barrels 10° apart that close to 1° apart, plus two side barrels."""
    barrels: list[Barrel] = []
    for i in range(SPREAD_BARRELS):
        offset = i - SPREAD_BARRELS // 2
        barrels.append(
            Barrel(
                angle=deg_to_rad(offset * SPREAD_FIRE_STEP_DEG),
                turn_after_units=SPREAD_TURN_AFTER_UNITS,
                turn_angle=deg_to_rad(offset * SPREAD_TURN_STEP_DEG),
            )
        )
    for sign in (1.0, -1.0):
        barrels.append(
            Barrel(
                angle=deg_to_rad(sign * SPREAD_SIDE_DEG),
                turn_after_units=SPREAD_SIDE_TURN_AFTER_UNITS,
                turn_angle=deg_to_rad(sign * SPREAD_SIDE_TURN_DEG),
            )
        )
    return barrels
