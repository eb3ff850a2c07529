from __future__ import annotations

from dataclasses import dataclass, field
import math

import pytest

from kiln.geom import Vec2

from barrage.config import GameConfig
from barrage.projectiles import BulletSystem, Owner, Projectile


@dataclass(slots=True)
class _Recorder:
    spawned_log: list[Projectile] = field(default_factory=list)
    removed_log: list[Projectile] = field(default_factory=list)

    def spawned(self, projectile: Projectile) -> None:
        self.spawned_log.append(projectile)

    def removed(self, projectile: Projectile) -> None:
        self.removed_log.append(projectile)


def _system(**kwargs) -> BulletSystem:
    return BulletSystem(GameConfig(width=800, height=600, cull_margin=50.0), **kwargs)


def test_fire_registers_and_returns_projectile() -> None:
    system = _system()

    proj = system.fire(Vec2(10.0, 20.0), 0.0, system.config.player_bullet, Owner.PLAYER)

    assert system.projectiles == [proj]
    assert proj.pos == Vec2(10.0, 20.0)


def test_fire_player_spread_fires_nine_turning_bullets() -> None:
    system = _system()

    fired = system.fire_player_spread(Vec2(100.0, 300.0))

    assert len(fired) == 9
    assert all(proj.owner is Owner.PLAYER for proj in fired)
    assert sorted(proj.turn_distance for proj in fired) == [80.0] * 7 + [160.0] * 2
    assert sorted(round(math.degrees(proj.angle)) for proj in fired) == [-35, -30, -20, -10, 0, 10, 20, 30, 35]


def test_fire_circle_uses_monster_bullets_without_turning() -> None:
    system = _system()

    fired = system.fire_circle(Vec2(400.0, 300.0), 6)

    assert [proj.angle for proj in fired] == [2.0 * math.pi / 6 * k for k in range(6)]
    assert all(proj.owner is Owner.MONSTER for proj in fired)
    assert all(proj.turn_distance == 0.0 for proj in fired)


def test_fire_fan_single_and_empty() -> None:
    system = _system()

    assert [proj.angle for proj in system.fire_fan(Vec2(), 160.0, 1)] == [math.pi]
    assert system.fire_fan(Vec2(), 160.0, 0) == []
    assert len(system) == 1


def test_projectile_culled_on_first_tick_outside_expanded_bounds() -> None:
    system = _system()
    definition = system.config.player_bullet
    # 600 u/s for 5 ms moves 3 units.
    edge = system.fire(Vec2(847.0, 300.0), 0.0, definition, Owner.PLAYER)
    leaving = system.fire(Vec2(848.0, 300.0), 0.0, definition, Owner.PLAYER)

    assert system.update(5.0) == 1
    assert edge.pos.x == 850.0
    assert edge in system.projectiles
    assert leaving not in system.projectiles
    assert not leaving.active

    system.update(5.0)
    assert system.projectiles == []


def test_culling_never_skips_neighbours() -> None:
    system = _system()
    definition = system.config.mob_bullet
    doomed = [system.fire(Vec2(-49.0, 100.0 + i), math.pi, definition, Owner.MONSTER) for i in range(3)]
    keepers = [system.fire(Vec2(400.0, 100.0 + i), math.pi, definition, Owner.MONSTER) for i in range(3)]
    interleaved = [doomed[0], keepers[0], doomed[1], doomed[2], keepers[1], keepers[2]]
    system._bullets = interleaved

    system.update(100.0)

    assert system.projectiles == keepers
    for proj in keepers:
        assert proj.age_ms == 100.0
        assert math.isclose(proj.pos.x, 380.0, abs_tol=1e-9)


def test_by_owner_filters() -> None:
    system = _system()
    system.fire_player_spread(Vec2(100.0, 300.0))
    system.fire_circle(Vec2(400.0, 300.0), 4)

    assert len(system.player_bullets()) == 9
    assert len(system.monster_bullets()) == 4
    assert system.by_owner(Owner.MONSTER) == system.monster_bullets()


def test_remove_is_idempotent() -> None:
    system = _system()
    proj = system.fire(Vec2(), 0.0, system.config.mob_bullet, Owner.MONSTER)

    assert system.remove(proj) is True
    assert system.remove(proj) is False
    assert len(system) == 0
    assert not proj.active


def test_destroy_releases_everything_and_notifies_listener() -> None:
    recorder = _Recorder()
    system = _system(listener=recorder)
    fired = system.fire_circle(Vec2(400.0, 300.0), 5)

    system.destroy()

    assert len(system) == 0
    assert recorder.spawned_log == fired
    assert recorder.removed_log == fired
    assert all(not proj.active for proj in fired)


def test_destroyed_system_refuses_new_projectiles() -> None:
    system = _system()
    system.fire_circle(Vec2(400.0, 300.0), 4)

    system.destroy()

    assert system.closed
    assert system.fire_circle(Vec2(400.0, 300.0), 4) == []
    assert system.fire_fan(Vec2(400.0, 300.0), 160.0, 8) == []
    assert system.fire_player_spread(Vec2(100.0, 300.0)) == []
    with pytest.raises(RuntimeError, match="destroyed"):
        system.fire(Vec2(), 0.0, system.config.mob_bullet, Owner.MONSTER)
    assert len(system) == 0


def test_bounds_follow_config() -> None:
    system = BulletSystem(GameConfig(width=320, height=240, cull_margin=10.0))

    assert system.bounds.x == -10.0
    assert system.bounds.right == 330.0
    assert system.bounds.bottom == 250.0
