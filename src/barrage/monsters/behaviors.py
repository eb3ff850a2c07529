from __future__ import annotations

"""Movement behavior states for hostile units.

Each unit carries exactly one state value. Step functions are pure: they take
the current state and position and return the next ones, so the runtime can
resolve a transition before deciding whether to fire.
"""

from dataclasses import dataclass
import math
import random
from typing import TypeAlias

from kiln.geom import Vec2
from kiln.math import deg_to_rad

__all__ = [
    "BehaviorState",
    "DASH_ARRIVE_DISTANCE",
    "DASH_DISTANCE_UNITS",
    "DASH_PAUSE_SECONDS",
    "DashStep",
    "Dashing",
    "Linear",
    "OSCILLATION_FREQUENCY",
    "Oscillating",
    "Paused",
    "initial_state",
    "pick_dash_target",
    "step_dash",
    "step_linear",
    "step_oscillating",
]

OSCILLATION_FREQUENCY = math.pi  # rad/s, one full wave every 2 seconds
DASH_DISTANCE_UNITS = 3.0
DASH_ARC_DEG = 45
DASH_HEADING_DEG = 180
DASH_SPEED_SCALE = 2.0
DASH_ARRIVE_DISTANCE = 5.0
DASH_PAUSE_SECONDS = 1.0


@dataclass(frozen=True, slots=True)
class Linear:
    pass


@dataclass(frozen=True, slots=True)
class Oscillating:
    base_y: float
    elapsed: float = 0.0


@dataclass(frozen=True, slots=True)
class Dashing:
    target: Vec2


@dataclass(frozen=True, slots=True)
class Paused:
    countdown: float = DASH_PAUSE_SECONDS


BehaviorState: TypeAlias = "Linear | Oscillating | Dashing | Paused"


@dataclass(frozen=True, slots=True)
class DashStep:
    state: Dashing | Paused
    pos: Vec2
    entered_pause: bool = False


def pick_dash_target(pos: Vec2, *, unit_size: float, rng: random.Random) -> Vec2:
    # Integer degrees in [-45, 45] around the leftward heading.
    offset = rng.randint(-DASH_ARC_DEG, DASH_ARC_DEG)
    heading = deg_to_rad(DASH_HEADING_DEG + offset)
    return pos + Vec2.from_polar(heading, unit_size * DASH_DISTANCE_UNITS)


def initial_state(behavior: str, pos: Vec2, *, unit_size: float, rng: random.Random) -> BehaviorState:
    if behavior == "sine":
        return Oscillating(base_y=pos.y)
    if behavior == "dash":
        return Dashing(target=pick_dash_target(pos, unit_size=unit_size, rng=rng))
    if behavior == "straight":
        return Linear()
    raise ValueError(f"unknown behavior {behavior!r}")


def step_linear(pos: Vec2, *, speed: float, dt: float) -> Vec2:
    return pos.offset(dx=-speed * dt)


def step_oscillating(
    state: Oscillating,
    pos: Vec2,
    *,
    speed: float,
    amplitude: float,
    dt: float,
) -> tuple[Oscillating, Vec2]:
    elapsed = state.elapsed + dt
    y = state.base_y + math.sin(elapsed * OSCILLATION_FREQUENCY) * amplitude
    return Oscillating(base_y=state.base_y, elapsed=elapsed), Vec2(pos.x - speed * dt, y)


def step_dash(
    state: Dashing | Paused,
    pos: Vec2,
    *,
    speed: float,
    dt: float,
    unit_size: float,
    rng: random.Random,
) -> DashStep:
    if isinstance(state, Paused):
        countdown = state.countdown - dt
        if countdown <= 0.0:
            return DashStep(state=Dashing(target=pick_dash_target(pos, unit_size=unit_size, rng=rng)), pos=pos)
        return DashStep(state=Paused(countdown=countdown), pos=pos)

    direction, dist = (state.target - pos).normalized_with_length(epsilon=0.0)
    if dist < DASH_ARRIVE_DISTANCE:
        return DashStep(state=Paused(), pos=pos, entered_pause=True)

    move = min(speed * DASH_SPEED_SCALE * dt, dist)
    return DashStep(state=state, pos=pos + direction * move)
