from __future__ import annotations

"""Pure helpers the renderer uses to turn simulation entities into sprites.

The simulation never imports this module.
"""

from dataclasses import dataclass

from kiln.color import RGBA, WHITE

from ..monsters import Monster
from ..projectiles import Owner, Projectile
from ..sizing import display_size

__all__ = [
    "BULLET_FRAME_RATE",
    "DEPTH_MONSTER",
    "DEPTH_MONSTER_BULLET",
    "DEPTH_PLAYER_BULLET",
    "HIT_FLASH_TINT",
    "MONSTER_FRAME_RATE",
    "SpriteState",
    "animation_frame",
    "frame_key",
    "monster_sprite",
    "projectile_sprite",
]

BULLET_FRAME_RATE = 10.0
MONSTER_FRAME_RATE = 6.0

DEPTH_MONSTER = 5
DEPTH_PLAYER_BULLET = 7
DEPTH_MONSTER_BULLET = 9

HIT_FLASH_TINT = RGBA.from_hex(0xFF0000)
DEATH_SCALE_GROWTH = 0.5


@dataclass(frozen=True, slots=True)
class SpriteState:
    key: str
    x: float
    y: float
    width: float
    height: float
    rotation: float
    depth: int
    tint: RGBA = WHITE


def animation_frame(age_ms: float, *, frame_rate: float, frame_count: int) -> int:
    if frame_count <= 1 or frame_rate <= 0.0:
        return 0
    return int(max(0.0, age_ms) / 1000.0 * frame_rate) % int(frame_count)


def frame_key(prefix: str, index: int) -> str:
    return f"{prefix}-{int(index)}"


def projectile_sprite(projectile: Projectile, *, unit_size: float) -> SpriteState:
    definition = projectile.definition
    width, height = display_size(
        definition.frame_width,
        definition.frame_height,
        units=definition.units,
        unit_size=unit_size,
    )
    frame = animation_frame(projectile.age_ms, frame_rate=BULLET_FRAME_RATE, frame_count=definition.frame_count)
    return SpriteState(
        key=frame_key(definition.key, frame),
        x=projectile.pos.x,
        y=projectile.pos.y,
        width=width,
        height=height,
        rotation=projectile.heading,
        depth=DEPTH_PLAYER_BULLET if projectile.owner is Owner.PLAYER else DEPTH_MONSTER_BULLET,
    )


def monster_sprite(monster: Monster, *, age_ms: float) -> SpriteState:
    width, height = monster.size
    tint = HIT_FLASH_TINT if monster.flashing else WHITE
    if monster.fade is not None:
        # Fade-out: grow to 1.5x while alpha drops to zero.
        growth = 1.0 + DEATH_SCALE_GROWTH * monster.fade
        width *= growth
        height *= growth
        tint = tint.with_alpha(1.0 - monster.fade)
    frame = animation_frame(age_ms, frame_rate=MONSTER_FRAME_RATE, frame_count=monster.definition.frame_count)
    return SpriteState(
        key=frame_key(f"mob-{monster.type}", frame),
        x=monster.pos.x,
        y=monster.pos.y,
        width=width,
        height=height,
        rotation=0.0,
        depth=DEPTH_MONSTER,
        tint=tint,
    )
