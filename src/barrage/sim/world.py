from __future__ import annotations

import random

import msgspec

from kiln.geom import Vec2
from kiln.timers import TimerQueue

from ..config import GameConfig, MonsterDef, default_config
from ..debug_log import trace
from ..monsters import Monster
from ..projectiles import BulletSystem, Owner, TurnMode

__all__ = [
    "DEATH_FADE_MS",
    "MonsterRecord",
    "ProjectileRecord",
    "World",
    "WorldSnapshot",
]

DEATH_FADE_MS = 200.0
DEATH_FADE_STEPS = 4


class ProjectileRecord(msgspec.Struct, frozen=True):
    x: float
    y: float
    radius: float
    owner: str
    damage: float


class MonsterRecord(msgspec.Struct, frozen=True):
    id: int
    type: str
    x: float
    y: float
    radius: float
    hp: float
    alive: bool
    damage: float


class WorldSnapshot(msgspec.Struct, frozen=True):
    tick_index: int
    elapsed_ms: float
    projectiles: list[ProjectileRecord]
    monsters: list[MonsterRecord]


class World:
    """Frame driver facade: timers, then monsters, then projectiles, once per tick."""

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        turn_mode: TurnMode = TurnMode.HORIZONTAL,
    ) -> None:
        self.config = config if config is not None else default_config()
        self.rng = rng if rng is not None else random.Random()
        self.timers = TimerQueue()
        self.bullets = BulletSystem(self.config, turn_mode=turn_mode)
        self.monsters: list[Monster] = []
        self.tick_index = 0
        self.kills = 0
        self.culled = 0
        self._next_monster_id = 1

    @property
    def elapsed_ms(self) -> float:
        return self.timers.now_ms

    def spawn_monster(self, monster: str | MonsterDef, pos: Vec2) -> Monster:
        definition = self.config.monster(monster) if isinstance(monster, str) else monster
        unit = Monster(
            definition,
            pos,
            bullets=self.bullets,
            timers=self.timers,
            rng=self.rng,
            on_death=self._begin_fade,
            monster_id=self._next_monster_id,
        )
        self._next_monster_id += 1
        self.monsters.append(unit)
        trace("monster_spawn", id=unit.id, type=unit.type, x=pos.x, y=pos.y)
        return unit

    def live_monsters(self) -> list[Monster]:
        return [unit for unit in self.monsters if unit.alive]

    def tick(self, dt_ms: float) -> None:
        self.timers.advance(dt_ms)
        for unit in list(self.monsters):
            unit.update(dt_ms)
        self.culled += self.bullets.update(dt_ms)
        self.tick_index += 1

    def _begin_fade(self, unit: Monster) -> None:
        # Stand-in for the renderer's fade-out tween: progress in steps, release on completion.
        self.kills += 1
        unit.fade = 0.0
        owner = ("fade", unit.id)
        step_ms = DEATH_FADE_MS / DEATH_FADE_STEPS
        for step in range(1, DEATH_FADE_STEPS):
            self.timers.schedule(step_ms * step, _fade_setter(unit, step / DEATH_FADE_STEPS), owner=owner)
        self.timers.schedule(DEATH_FADE_MS, lambda: self.release_monster(unit), owner=owner)

    def release_monster(self, unit: Monster) -> bool:
        """Remove a unit from the world; safe to call more than once."""
        self.timers.cancel_owner(("fade", unit.id))
        unit.destroy()
        for index, entry in enumerate(self.monsters):
            if entry is unit:
                del self.monsters[index]
                unit.fade = 1.0
                trace("monster_release", id=unit.id, type=unit.type)
                return True
        return False

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            tick_index=self.tick_index,
            elapsed_ms=self.elapsed_ms,
            projectiles=[
                ProjectileRecord(
                    x=bullet.pos.x,
                    y=bullet.pos.y,
                    radius=bullet.radius,
                    owner=bullet.owner.value,
                    damage=bullet.damage,
                )
                for bullet in self.bullets.projectiles
            ],
            monsters=[
                MonsterRecord(
                    id=unit.id,
                    type=unit.type,
                    x=unit.pos.x,
                    y=unit.pos.y,
                    radius=unit.radius,
                    hp=unit.hp,
                    alive=unit.alive,
                    damage=unit.damage,
                )
                for unit in self.monsters
            ],
        )

    def count_by_owner(self) -> dict[str, int]:
        return {owner.value: len(self.bullets.by_owner(owner)) for owner in Owner}

    def shutdown(self) -> None:
        self.timers.clear()
        for unit in self.monsters:
            unit.destroy()
        self.monsters.clear()
        self.bullets.destroy()
        trace("world_shutdown", tick=self.tick_index)


def _fade_setter(unit: Monster, value: float):
    def _set() -> None:
        unit.fade = value

    return _set
