from __future__ import annotations

from pathlib import Path
import math
import random

import pyray as rl

from kiln.geom import Vec2
from kiln.math import clamp

from ..assets import AssetCatalog
from ..config import GameConfig
from ..debug import debug_enabled
from ..projectiles import Owner
from ..sim import FixedStepClock, World
from ..sim.demo import DemoDirector
from .binding import SpriteState, monster_sprite, projectile_sprite

UI_TEXT_COLOR = rl.Color(220, 220, 220, 255)
UI_HINT_COLOR = rl.Color(140, 140, 140, 255)
BACKGROUND = rl.Color(12, 12, 18, 255)
PLAYER_COLOR = rl.Color(80, 160, 240, 255)
PLAYER_BULLET_COLOR = rl.Color(120, 220, 255, 255)
MONSTER_BULLET_COLOR = rl.Color(255, 120, 80, 255)
MONSTER_COLOR = rl.Color(200, 80, 200, 255)

PLAYER_SPEED = 240.0
SPREAD_COOLDOWN_MS = 150.0


class BattleView:
    def __init__(self, config: GameConfig, *, assets_dir: Path, seed: int | None = None) -> None:
        self._catalog = AssetCatalog.for_config(assets_dir, config)
        self._config = self._catalog.measure_config(config)
        self._textures: dict[str, rl.Texture] = {}
        self._missing: list[str] = []
        self._world = World(self._config, rng=random.Random(seed))
        self._clock = FixedStepClock(tick_rate=60)
        self._director = DemoDirector(self._world)
        self._cooldown_ms = 0.0

    def open(self) -> None:
        self._missing = self._catalog.missing()
        for key in self._catalog.frames:
            if key in self._missing:
                continue
            path = self._catalog.path(key)
            if path is not None:
                self._textures[key] = rl.load_texture(str(path))

    def close(self) -> None:
        for texture in self._textures.values():
            rl.unload_texture(texture)
        self._textures.clear()
        self._world.shutdown()

    def _handle_input(self, dt: float) -> None:
        pos = self._director.player_pos or Vec2()
        dx = float(rl.is_key_down(rl.KeyboardKey.KEY_RIGHT)) - float(rl.is_key_down(rl.KeyboardKey.KEY_LEFT))
        dy = float(rl.is_key_down(rl.KeyboardKey.KEY_DOWN)) - float(rl.is_key_down(rl.KeyboardKey.KEY_UP))
        pos = pos.offset(dx=dx * PLAYER_SPEED * dt, dy=dy * PLAYER_SPEED * dt)
        self._director.player_pos = Vec2(
            clamp(pos.x, 0.0, float(self._config.width)),
            clamp(pos.y, 0.0, float(self._config.height)),
        )
        if rl.is_key_down(rl.KeyboardKey.KEY_SPACE) and self._cooldown_ms <= 0.0:
            self._director.fire_spread()
            self._cooldown_ms = SPREAD_COOLDOWN_MS

    def update(self, dt: float) -> None:
        self._handle_input(dt)
        ticks = self._clock.advance(dt * 1000.0)
        for _ in range(ticks):
            self._cooldown_ms -= self._clock.dt_tick_ms
            self._director.tick(self._clock.dt_tick_ms)

    def _draw_sprite(self, sprite: SpriteState, fallback: rl.Color) -> None:
        texture = self._textures.get(sprite.key)
        if texture is None:
            color = rl.Color(fallback.r, fallback.g, fallback.b, int(255 * sprite.tint.a))
            rl.draw_circle_v(rl.Vector2(sprite.x, sprite.y), min(sprite.width, sprite.height) * 0.5, color)
            return
        src = rl.Rectangle(0.0, 0.0, float(texture.width), float(texture.height))
        dst = rl.Rectangle(sprite.x, sprite.y, sprite.width, sprite.height)
        origin = rl.Vector2(sprite.width * 0.5, sprite.height * 0.5)
        rl.draw_texture_pro(texture, src, dst, origin, math.degrees(sprite.rotation), sprite.tint.to_rl())

    def draw(self) -> None:
        rl.clear_background(BACKGROUND)
        world = self._world
        layered: list[tuple[SpriteState, rl.Color]] = []
        for unit in world.monsters:
            layered.append((monster_sprite(unit, age_ms=world.elapsed_ms), MONSTER_COLOR))
        for bullet in world.bullets.projectiles:
            color = PLAYER_BULLET_COLOR if bullet.owner is Owner.PLAYER else MONSTER_BULLET_COLOR
            layered.append((projectile_sprite(bullet, unit_size=self._config.unit_size), color))
        layered.sort(key=lambda item: item[0].depth)
        for sprite, color in layered:
            self._draw_sprite(sprite, color)

        player = self._director.player_pos
        if player is not None:
            rl.draw_circle_v(player.to_rl(), self._config.unit_size * 0.4, PLAYER_COLOR)

        counts = world.count_by_owner()
        rl.draw_text(
            f"tick {world.tick_index}  monsters {len(world.monsters)}  "
            f"player {counts['player']}  monster {counts['monster']}",
            12,
            12,
            18,
            UI_TEXT_COLOR,
        )
        rl.draw_text("arrows: move  space: spread", 12, 34, 16, UI_HINT_COLOR)
        if self._missing:
            rl.draw_text(f"missing {len(self._missing)} frames, drawing shapes", 12, 54, 16, UI_HINT_COLOR)
        if debug_enabled():
            self._draw_hit_radii()

    def _draw_hit_radii(self) -> None:
        for unit in self._world.monsters:
            rl.draw_circle_lines(int(unit.pos.x), int(unit.pos.y), unit.radius, UI_HINT_COLOR)
        for bullet in self._world.bullets.projectiles:
            rl.draw_circle_lines(int(bullet.pos.x), int(bullet.pos.y), bullet.radius, UI_HINT_COLOR)
