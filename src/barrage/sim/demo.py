from __future__ import annotations

from dataclasses import dataclass

from kiln.geom import Vec2

from .world import World

__all__ = ["DemoDirector"]


@dataclass(slots=True)
class DemoDirector:
    """Scripted driver for headless runs and the debug view.

    Spawns a monster at the right edge every `spawn_every_ms`, cycling through
    the configured types, optionally fires the player spread from `player_pos`,
    and releases monsters that drifted past the left edge.
    """

    world: World
    spawn_every_ms: float = 1500.0
    spread_every_ms: float = 0.0
    player_pos: Vec2 | None = None
    spawn_timer_ms: float = 0.0
    spread_timer_ms: float = 0.0
    spawned: int = 0
    spreads: int = 0

    def __post_init__(self) -> None:
        if self.player_pos is None:
            config = self.world.config
            self.player_pos = Vec2(config.unit_size * 2.0, config.height * 0.5)

    def _spawn_next(self) -> None:
        config = self.world.config
        types = sorted(config.monsters)
        if not types:
            return
        monster_type = types[self.spawned % len(types)]
        margin = config.unit_size * 2.0
        y = self.world.rng.uniform(margin, max(margin, config.height - margin))
        self.world.spawn_monster(monster_type, Vec2(config.width + config.unit_size, y))
        self.spawned += 1

    def fire_spread(self) -> None:
        if self.player_pos is None:
            return
        self.world.bullets.fire_player_spread(self.player_pos)
        self.spreads += 1

    def tick(self, dt_ms: float) -> None:
        if self.spawn_every_ms > 0.0:
            self.spawn_timer_ms += dt_ms
            while self.spawn_timer_ms >= self.spawn_every_ms:
                self.spawn_timer_ms -= self.spawn_every_ms
                self._spawn_next()

        if self.spread_every_ms > 0.0:
            self.spread_timer_ms += dt_ms
            while self.spread_timer_ms >= self.spread_every_ms:
                self.spread_timer_ms -= self.spread_every_ms
                self.fire_spread()

        self.world.tick(dt_ms)

        left_edge = -self.world.config.cull_margin - self.world.config.unit_size
        for unit in list(self.world.monsters):
            if unit.alive and unit.pos.x < left_edge:
                self.world.release_monster(unit)
