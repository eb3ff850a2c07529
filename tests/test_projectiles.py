from __future__ import annotations

import math

from kiln.geom import Vec2

from barrage.config import MOB_BULLET, PLAYER_BULLET, BulletDef
from barrage.projectiles import Owner, Projectile, TurnMode

UNIT = 40.0


def _launch(angle: float, *, turn_after_units: float = 0.0, turn_angle: float = 0.0, **kwargs) -> Projectile:
    return Projectile.launch(
        pos=Vec2(100.0, 300.0),
        angle=angle,
        definition=PLAYER_BULLET,
        owner=Owner.PLAYER,
        unit_size=UNIT,
        turn_after_units=turn_after_units,
        turn_angle=turn_angle,
        **kwargs,
    )


def test_launch_derives_velocity_from_speed_and_angle() -> None:
    proj = _launch(0.5)

    assert proj.vel.x == PLAYER_BULLET.speed * math.cos(0.5)
    assert proj.vel.y == PLAYER_BULLET.speed * math.sin(0.5)
    assert proj.origin == proj.pos
    assert proj.turn_distance == 0.0


def test_update_integrates_position_in_milliseconds() -> None:
    proj = _launch(0.0)

    proj.update(100.0)

    assert math.isclose(proj.pos.x, 160.0, abs_tol=1e-9)
    assert math.isclose(proj.pos.y, 300.0, abs_tol=1e-9)
    assert proj.age_ms == 100.0


def test_turn_snaps_to_horizontal_once_distance_is_reached() -> None:
    angle = 0.5
    proj = _launch(angle, turn_after_units=2.0, turn_angle=math.radians(3.0))
    original = Vec2(PLAYER_BULLET.speed * math.cos(angle), PLAYER_BULLET.speed * math.sin(angle))
    assert proj.turn_distance == 80.0

    # 600 u/s * 16 ms = 9.6 per tick: 76.8 after eight ticks, 86.4 after nine.
    for _ in range(8):
        proj.update(16.0)
        assert proj.origin.distance_to(proj.pos) < proj.turn_distance
        assert proj.vel == original
        assert not proj.has_turned

    proj.update(16.0)
    assert proj.has_turned
    assert proj.vel == Vec2(PLAYER_BULLET.speed, 0.0)

    for _ in range(5):
        proj.update(16.0)
        assert proj.has_turned
        assert proj.vel == Vec2(PLAYER_BULLET.speed, 0.0)


def test_turn_can_follow_requested_angle() -> None:
    target = math.radians(-15.0)
    proj = _launch(math.radians(-35.0), turn_after_units=1.0, turn_angle=target, turn_mode=TurnMode.REQUESTED)

    for _ in range(20):
        proj.update(16.0)

    assert proj.has_turned
    assert math.isclose(proj.heading, target, abs_tol=1e-9)
    assert math.isclose(proj.vel.length(), PLAYER_BULLET.speed, abs_tol=1e-9)


def test_turn_is_one_shot_even_when_called_again() -> None:
    proj = _launch(1.0, turn_after_units=0.1)
    proj.update(50.0)
    assert proj.has_turned

    proj.vel = Vec2(0.0, 1.0)
    proj.turn()

    assert proj.vel == Vec2(0.0, 1.0)


def test_non_positive_turn_distance_never_turns() -> None:
    proj = _launch(1.0, turn_after_units=-2.0)

    for _ in range(50):
        proj.update(16.0)

    assert not proj.has_turned
    assert math.isclose(proj.heading, 1.0, abs_tol=1e-9)


def test_radius_is_half_the_smaller_display_extent() -> None:
    definition = BulletDef(key="wide", speed=100.0, units=1.0, frame_width=64, frame_height=32)
    proj = Projectile.launch(pos=Vec2(), angle=0.0, definition=definition, owner=Owner.MONSTER, unit_size=UNIT)

    # Scaled so the long side spans one unit (40): 40x20 on screen.
    assert proj.radius == 10.0


def test_damage_and_owner_queries() -> None:
    proj = Projectile.launch(pos=Vec2(), angle=0.0, definition=MOB_BULLET, owner=Owner.MONSTER, unit_size=UNIT)

    assert proj.damage == MOB_BULLET.damage
    assert proj.owner is Owner.MONSTER
    assert proj.active
