from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class FixedStepClock:
    """Turns variable frame times into a whole number of fixed simulation ticks."""

    tick_rate: int = 60
    accum_ms: float = 0.0

    def __post_init__(self) -> None:
        tick_rate = int(self.tick_rate)
        if tick_rate <= 0:
            raise ValueError(f"tick_rate must be positive, got {tick_rate}")
        self.tick_rate = tick_rate
        self.accum_ms = float(self.accum_ms)

    @property
    def dt_tick_ms(self) -> float:
        return 1000.0 / float(self.tick_rate)

    def reset(self) -> None:
        self.accum_ms = 0.0

    def advance(self, dt_ms: float, *, max_dt_ms: float = 100.0) -> int:
        dt_ms = float(dt_ms)
        if dt_ms <= 0.0:
            return 0
        if dt_ms > float(max_dt_ms):
            dt_ms = float(max_dt_ms)

        self.accum_ms += dt_ms
        dt_tick = self.dt_tick_ms
        ticks = int((self.accum_ms + 1e-6) / dt_tick)
        if ticks <= 0:
            return 0

        self.accum_ms -= dt_tick * float(ticks)
        if self.accum_ms < 0.0:
            self.accum_ms = 0.0
        return ticks
