from __future__ import annotations

from pathlib import Path

import msgspec
import pytest

from barrage.config import (
    GameConfig,
    MonsterDef,
    default_config,
    dump_config,
    load_config,
    validate_config,
)


def test_default_config_covers_every_behavior() -> None:
    config = default_config()

    assert config.width == 800
    assert config.height == 600
    assert config.cull_margin == 50.0
    assert {monster.behavior for monster in config.monsters.values()} == {"straight", "sine", "dash"}
    assert config.monster("medium").fan_waves == 3
    assert config.monster("medium").fan_count == 8
    assert config.monster("small").fire_interval_ms == 3000.0


def test_dump_then_load_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "game.json"
    path.write_bytes(dump_config(default_config()))

    assert load_config(path) == default_config()


def test_partial_config_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "game.json"
    path.write_text('{"width": 1024, "unit_size": 32.0}', encoding="utf-8")

    config = load_config(path)

    assert config.width == 1024
    assert config.height == 600
    assert config.unit_size == 32.0
    assert "medium" in config.monsters


def test_unknown_field_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "game.json"
    path.write_text('{"widht": 1024}', encoding="utf-8")

    with pytest.raises(ValueError, match="game.json"):
        load_config(path)


def test_malformed_json_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "game.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)


def test_unknown_behavior_is_rejected() -> None:
    config = GameConfig(monsters={"odd": MonsterDef(type="odd", hp=1.0, speed=1.0, behavior="spiral")})

    with pytest.raises(ValueError, match="unknown behavior"):
        validate_config(config)


def test_monster_key_must_match_type() -> None:
    config = GameConfig(monsters={"a": MonsterDef(type="b", hp=1.0, speed=1.0)})

    with pytest.raises(ValueError, match="declares type"):
        validate_config(config)


@pytest.mark.parametrize(
    "changes, message",
    [
        ({"unit_size": 0.0}, "unit_size"),
        ({"width": 0}, "playfield"),
        ({"cull_margin": -1.0}, "cull_margin"),
    ],
)
def test_invalid_scalars_are_rejected(changes: dict[str, object], message: str) -> None:
    config = msgspec.structs.replace(default_config(), **changes)

    with pytest.raises(ValueError, match=message):
        validate_config(config)


def test_unknown_monster_lookup_lists_available_types() -> None:
    with pytest.raises(ValueError, match="available: drone, medium, small"):
        default_config().monster("boss")
