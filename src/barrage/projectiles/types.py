from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from kiln.geom import Vec2

from ..config import BulletDef
from ..sizing import radius_for


class Owner(Enum):
    PLAYER = "player"
    MONSTER = "monster"


class TurnMode(Enum):
    # Snap to due-right at base speed; the requested turn angle is kept but unused.
    HORIZONTAL = "horizontal"
    # Redirect to the requested turn angle at base speed.
    REQUESTED = "requested"


class ProjectileListener(Protocol):
    def spawned(self, projectile: Projectile) -> None: ...

    def removed(self, projectile: Projectile) -> None: ...


@dataclass(slots=True, eq=False)
class Projectile:
    definition: BulletDef
    owner: Owner
    pos: Vec2 = field(default_factory=Vec2)
    origin: Vec2 = field(default_factory=Vec2)
    vel: Vec2 = field(default_factory=Vec2)
    angle: float = 0.0
    turn_distance: float = 0.0
    turn_angle: float = 0.0
    turn_mode: TurnMode = TurnMode.HORIZONTAL
    has_turned: bool = False
    age_ms: float = 0.0
    radius: float = 0.0
    active: bool = True

    @classmethod
    def launch(
        cls,
        *,
        pos: Vec2,
        angle: float,
        definition: BulletDef,
        owner: Owner,
        unit_size: float,
        turn_after_units: float = 0.0,
        turn_angle: float = 0.0,
        turn_mode: TurnMode = TurnMode.HORIZONTAL,
    ) -> Projectile:
        return cls(
            definition=definition,
            owner=owner,
            pos=pos,
            origin=pos,
            vel=Vec2.from_polar(float(angle), float(definition.speed)),
            angle=float(angle),
            turn_distance=float(turn_after_units) * float(unit_size),
            turn_angle=float(turn_angle),
            turn_mode=turn_mode,
            radius=radius_for(
                definition.frame_width,
                definition.frame_height,
                units=definition.units,
                unit_size=unit_size,
            ),
        )

    @property
    def speed(self) -> float:
        return float(self.definition.speed)

    @property
    def damage(self) -> float:
        return float(self.definition.damage)

    @property
    def heading(self) -> float:
        if self.vel.length_sq() <= 0.0:
            return self.angle
        return self.vel.to_angle()

    def update(self, dt_ms: float) -> None:
        dt = float(dt_ms) / 1000.0
        self.age_ms += float(dt_ms)
        self.pos = self.pos + self.vel * dt

        if self.turn_distance <= 0.0 or self.has_turned:
            return
        traveled = self.origin.distance_to(self.pos)
        if traveled >= self.turn_distance:
            self.turn()

    def turn(self) -> None:
        if self.has_turned:
            return
        self.has_turned = True
        if self.turn_mode is TurnMode.REQUESTED:
            self.vel = Vec2.from_polar(self.turn_angle, self.speed)
        else:
            self.vel = Vec2(self.speed, 0.0)
