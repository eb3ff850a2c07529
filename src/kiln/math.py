from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def deg_to_rad(degrees: float) -> float:
    return float(degrees) * (math.pi / 180.0)
