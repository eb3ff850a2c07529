from __future__ import annotations

"""Hostile unit runtime.

A `Monster` advances its behavior state each tick and fires through the shared
`BulletSystem`. Deferred actions (fan wave repeats, hit-flash clear) go through
the simulation `TimerQueue` and are owned by the unit, so `destroy()` or death
cancels them.
"""

from itertools import count
import random
from typing import Callable

from kiln.geom import Vec2
from kiln.timers import TimerHandle, TimerQueue

from ..config import MonsterDef
from ..debug_log import trace
from ..projectiles import BulletSystem
from ..sizing import display_size
from .behaviors import (
    BehaviorState,
    Dashing,
    Linear,
    Oscillating,
    Paused,
    initial_state,
    step_dash,
    step_linear,
    step_oscillating,
)

__all__ = [
    "HIT_FLASH_MS",
    "Monster",
]

HIT_FLASH_MS = 100.0

DeathHandler = Callable[["Monster"], None]

_MONSTER_IDS = count(1)


class Monster:
    def __init__(
        self,
        definition: MonsterDef,
        pos: Vec2,
        *,
        bullets: BulletSystem,
        timers: TimerQueue,
        rng: random.Random | None = None,
        on_death: DeathHandler | None = None,
        monster_id: int | None = None,
    ) -> None:
        self.id = monster_id if monster_id is not None else next(_MONSTER_IDS)
        self.definition = definition
        self.pos = pos
        self.hp = float(definition.hp)
        self.alive = True
        self.flashing = False
        self.fade: float | None = None
        self.fire_timer_ms = 0.0
        self._flash_timer: TimerHandle | None = None
        self._bullets = bullets
        self._timers = timers
        self._rng = rng if rng is not None else random.Random()
        self._on_death = on_death
        self._unit_size = float(bullets.config.unit_size)
        self.state: BehaviorState = initial_state(
            definition.behavior,
            pos,
            unit_size=self._unit_size,
            rng=self._rng,
        )

    def __repr__(self) -> str:
        return f"Monster(id={self.id}, type={self.type!r}, pos=({self.pos.x:.1f}, {self.pos.y:.1f}), hp={self.hp})"

    @property
    def timer_owner(self) -> tuple[str, int]:
        return ("monster", self.id)

    @property
    def type(self) -> str:
        return self.definition.type

    @property
    def exp(self) -> int:
        return int(self.definition.exp)

    @property
    def damage(self) -> float:
        return float(self.definition.damage)

    @property
    def size(self) -> tuple[float, float]:
        return display_size(
            self.definition.frame_width,
            self.definition.frame_height,
            units=self.definition.units,
            unit_size=self._unit_size,
        )

    @property
    def radius(self) -> float:
        width, height = self.size
        return min(width, height) * 0.5

    def is_alive(self) -> bool:
        return self.alive

    def update(self, dt_ms: float) -> None:
        if not self.alive:
            return

        dt = float(dt_ms) / 1000.0
        speed = float(self.definition.speed)
        state = self.state

        if isinstance(state, Oscillating):
            self.state, self.pos = step_oscillating(state, self.pos, speed=speed, amplitude=self._unit_size, dt=dt)
            self._tick_fire_timer(dt_ms)
        elif isinstance(state, (Dashing, Paused)):
            step = step_dash(state, self.pos, speed=speed, dt=dt, unit_size=self._unit_size, rng=self._rng)
            self.state = step.state
            self.pos = step.pos
            if step.entered_pause:
                self._fire_fan_waves()
        elif isinstance(state, Linear):
            self.pos = step_linear(self.pos, speed=speed, dt=dt)
            self._tick_fire_timer(dt_ms)

    def _tick_fire_timer(self, dt_ms: float) -> None:
        interval = float(self.definition.fire_interval_ms)
        if interval <= 0.0 or self._bullets.closed:
            return
        self.fire_timer_ms += float(dt_ms)
        if self.fire_timer_ms >= interval:
            self.fire_timer_ms = 0.0
            self._bullets.fire_circle(self.pos, self.definition.circle_count)
            trace("monster_fire", id=self.id, type=self.type, pattern="circle")

    def _fire_fan_waves(self) -> None:
        waves = int(self.definition.fan_waves)
        if waves <= 0:
            return
        interval = float(self.definition.fan_wave_interval_ms)
        fired = 0

        def fire_wave() -> None:
            nonlocal fired
            if not self.alive or self._bullets.closed or fired >= waves:
                return
            self._bullets.fire_fan(self.pos, self.definition.fan_spread_deg, self.definition.fan_count)
            fired += 1
            trace("monster_fire", id=self.id, type=self.type, pattern="fan", wave=fired)
            if fired < waves:
                self._timers.schedule(interval, fire_wave, owner=self.timer_owner)

        fire_wave()

    def take_damage(self, amount: float) -> bool:
        """Apply damage; returns True only on the call that kills the unit."""
        if not self.alive:
            return False

        self.hp -= float(amount)
        self.flashing = True
        # Every hit flashes for the full HIT_FLASH_MS.
        if self._flash_timer is not None:
            self._timers.cancel(self._flash_timer)
        self._flash_timer = self._timers.schedule(HIT_FLASH_MS, self._clear_flash, owner=self.timer_owner)

        if self.hp <= 0.0:
            self._die()
            return True
        return False

    def _clear_flash(self) -> None:
        self.flashing = False
        self._flash_timer = None

    def _die(self) -> None:
        self.alive = False
        self.flashing = False
        self._timers.cancel_owner(self.timer_owner)
        trace("monster_death", id=self.id, type=self.type, x=self.pos.x, y=self.pos.y)
        if self._on_death is not None:
            self._on_death(self)

    def destroy(self) -> None:
        """Detach from the simulation: drop every pending timer owned by this unit."""
        self.alive = False
        self._timers.cancel_owner(self.timer_owner)
