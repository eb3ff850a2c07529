from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import msgspec
from PIL import Image

from .config import BulletDef, GameConfig, MonsterDef

__all__ = [
    "AnimationConfig",
    "AssetCatalog",
    "FrameAsset",
    "bullet_frames",
    "frame_assets",
    "frame_sequence",
    "monster_frames",
]


@dataclass(frozen=True, slots=True)
class AnimationConfig:
    key: str
    frame_count: int


@dataclass(frozen=True, slots=True)
class FrameAsset:
    key: str
    rel_path: str


def frame_sequence(prefix: str, folder: str, frame_count: int) -> list[FrameAsset]:
    """`prefix-{i}` keys stored as `{folder}/{prefix with underscores}_{i}.png`."""
    stem = prefix.replace("-", "_")
    return [FrameAsset(key=f"{prefix}-{i}", rel_path=f"{folder}/{stem}_{i}.png") for i in range(int(frame_count))]


def frame_assets(base_path: str, animations: list[AnimationConfig]) -> list[FrameAsset]:
    """Frame keys and paths named `{base}/{base}_{action}_{frame}.png`.

    `player` + `idle` x2 gives `player-idle-0 -> player/player_idle_0.png` and so on.
    """

    frames: list[FrameAsset] = []
    for anim in animations:
        frames.extend(frame_sequence(f"{base_path}-{anim.key}", base_path, anim.frame_count))
    return frames


def bullet_frames(definition: BulletDef) -> list[FrameAsset]:
    if definition.key.startswith("player-"):
        # `player-bullet` is the player sheet's `bullet` action.
        return frame_assets("player", [AnimationConfig(definition.key.removeprefix("player-"), definition.frame_count)])
    return frame_sequence(definition.key, "monster", definition.frame_count)


def monster_frames(definition: MonsterDef) -> list[FrameAsset]:
    return frame_sequence(f"mob-{definition.type}", "monster", definition.frame_count)


@dataclass(slots=True)
class AssetCatalog:
    root: Path
    frames: dict[str, FrameAsset] = field(default_factory=dict)

    @classmethod
    def for_config(cls, root: Path, config: GameConfig) -> AssetCatalog:
        catalog = cls(root=root)
        catalog.register(bullet_frames(config.player_bullet))
        catalog.register(bullet_frames(config.mob_bullet))
        for monster in config.monsters.values():
            catalog.register(monster_frames(monster))
        return catalog

    def register(self, frames: list[FrameAsset]) -> None:
        for frame in frames:
            self.frames[frame.key] = frame

    def path(self, key: str) -> Path | None:
        frame = self.frames.get(key)
        if frame is None:
            return None
        return self.root / frame.rel_path

    def missing(self) -> list[str]:
        return sorted(key for key, frame in self.frames.items() if not (self.root / frame.rel_path).is_file())

    def image_size(self, key: str) -> tuple[int, int] | None:
        path = self.path(key)
        if path is None or not path.is_file():
            return None
        with Image.open(path) as image:
            width, height = image.size
        return int(width), int(height)

    def measure_bullet(self, definition: BulletDef) -> BulletDef:
        """Copy of the definition with frame extents read from its first frame, when present."""
        size = self.image_size(f"{definition.key}-0")
        if size is None:
            return definition
        return msgspec.structs.replace(definition, frame_width=size[0], frame_height=size[1])

    def measure_monster(self, definition: MonsterDef) -> MonsterDef:
        size = self.image_size(f"mob-{definition.type}-0")
        if size is None:
            return definition
        return msgspec.structs.replace(definition, frame_width=size[0], frame_height=size[1])

    def measure_config(self, config: GameConfig) -> GameConfig:
        return msgspec.structs.replace(
            config,
            player_bullet=self.measure_bullet(config.player_bullet),
            mob_bullet=self.measure_bullet(config.mob_bullet),
            monsters={name: self.measure_monster(monster) for name, monster in config.monsters.items()},
        )
