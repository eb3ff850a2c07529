from __future__ import annotations

from pathlib import Path

import msgspec

__all__ = [
    "BEHAVIORS",
    "BulletDef",
    "GameConfig",
    "MOB_BULLET",
    "MonsterDef",
    "PLAYER_BULLET",
    "UNIT_SIZE",
    "default_config",
    "dump_config",
    "load_config",
    "validate_config",
]

UNIT_SIZE = 40.0
PLAYFIELD_WIDTH = 800
PLAYFIELD_HEIGHT = 600
CULL_MARGIN = 50.0

BEHAVIORS = ("straight", "sine", "dash")


class BulletDef(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    key: str
    speed: float
    damage: float = 1.0
    units: float = 0.5
    frame_count: int = 1
    frame_width: int = 32
    frame_height: int = 32


class MonsterDef(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    type: str
    hp: float
    speed: float
    behavior: str = "straight"
    units: float = 1.0
    exp: int = 10
    damage: float = 1.0
    frame_count: int = 1
    frame_width: int = 64
    frame_height: int = 64
    fire_interval_ms: float = 3000.0
    circle_count: int = 8
    fan_spread_deg: float = 160.0
    fan_count: int = 8
    fan_waves: int = 3
    fan_wave_interval_ms: float = 200.0


PLAYER_BULLET = BulletDef(key="player-bullet", speed=600.0, damage=1.0, units=0.5, frame_count=4)
MOB_BULLET = BulletDef(key="mob-bullet", speed=200.0, damage=1.0, units=0.4, frame_count=2)


def _default_monsters() -> dict[str, MonsterDef]:
    monsters = (
        MonsterDef(type="drone", hp=2.0, speed=120.0, behavior="straight", units=0.8, exp=5, damage=1.0, frame_count=2),
        MonsterDef(type="small", hp=3.0, speed=80.0, behavior="sine", units=1.0, exp=10, damage=1.0, frame_count=4),
        MonsterDef(
            type="medium",
            hp=10.0,
            speed=60.0,
            behavior="dash",
            units=1.5,
            exp=30,
            damage=2.0,
            frame_count=4,
            fire_interval_ms=0.0,
        ),
    )
    return {monster.type: monster for monster in monsters}


class GameConfig(msgspec.Struct, forbid_unknown_fields=True):
    width: int = PLAYFIELD_WIDTH
    height: int = PLAYFIELD_HEIGHT
    unit_size: float = UNIT_SIZE
    cull_margin: float = CULL_MARGIN
    player_bullet: BulletDef = PLAYER_BULLET
    mob_bullet: BulletDef = MOB_BULLET
    monsters: dict[str, MonsterDef] = msgspec.field(default_factory=_default_monsters)

    def monster(self, monster_type: str) -> MonsterDef:
        try:
            return self.monsters[monster_type]
        except KeyError:
            available = ", ".join(sorted(self.monsters))
            raise ValueError(f"unknown monster type {monster_type!r} (available: {available})") from None


def default_config() -> GameConfig:
    return GameConfig()


def validate_config(config: GameConfig) -> GameConfig:
    if config.width <= 0 or config.height <= 0:
        raise ValueError(f"playfield must be positive, got {config.width}x{config.height}")
    if not (config.unit_size > 0.0):
        raise ValueError(f"unit_size must be positive, got {config.unit_size}")
    if config.cull_margin < 0.0:
        raise ValueError(f"cull_margin must not be negative, got {config.cull_margin}")
    for bullet in (config.player_bullet, config.mob_bullet):
        if bullet.speed < 0.0:
            raise ValueError(f"bullet {bullet.key!r} has negative speed {bullet.speed}")
        if bullet.frame_count < 1:
            raise ValueError(f"bullet {bullet.key!r} needs at least one frame")
    for name, monster in config.monsters.items():
        if monster.type != name:
            raise ValueError(f"monster entry {name!r} declares type {monster.type!r}")
        if monster.behavior not in BEHAVIORS:
            raise ValueError(f"monster {name!r} has unknown behavior {monster.behavior!r}")
        if monster.frame_count < 1:
            raise ValueError(f"monster {name!r} needs at least one frame")
    return config


def load_config(path: Path) -> GameConfig:
    try:
        config = msgspec.json.decode(path.read_bytes(), type=GameConfig)
    except msgspec.DecodeError as exc:
        raise ValueError(f"{path}: {exc}") from exc
    return validate_config(config)


def dump_config(config: GameConfig) -> bytes:
    return msgspec.json.format(msgspec.json.encode(config), indent=2)
