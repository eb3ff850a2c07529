from __future__ import annotations

import random

from kiln.geom import Vec2

from barrage.sim import World
from barrage.sim.demo import DemoDirector


def test_director_cycles_monster_types_at_right_edge() -> None:
    world = World(rng=random.Random(0))
    director = DemoDirector(world, spawn_every_ms=100.0)

    for _ in range(3):
        director.tick(100.0)

    assert director.spawned == 3
    assert [unit.type for unit in world.monsters] == ["drone", "medium", "small"]
    assert all(unit.pos.x > world.config.width - world.config.unit_size for unit in world.monsters)
    world.shutdown()


def test_director_fires_player_spread_on_interval() -> None:
    world = World(rng=random.Random(0))
    director = DemoDirector(world, spawn_every_ms=0.0, spread_every_ms=50.0)

    director.tick(100.0)

    assert director.spreads == 2
    assert len(world.bullets.player_bullets()) == 18


def test_director_releases_monsters_past_left_edge() -> None:
    world = World(rng=random.Random(0))
    director = DemoDirector(world, spawn_every_ms=0.0)
    left_edge = -world.config.cull_margin - world.config.unit_size
    unit = world.spawn_monster("drone", Vec2(left_edge - 10.0, 100.0))

    director.tick(16.0)

    assert unit not in world.monsters
    assert not unit.alive
