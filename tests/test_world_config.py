"""
Tests for world descriptors.
"""

import json
import random

import pytest
from config.world_config import build_world, load_world_config, parse_world_config
from core.audit import MemoryAuditSink
from core.constants import CreatureType, DamageKind, DifficultyTier
from core.error_handling import InvalidConfigurationError
from ui.input_source import ScriptedInputSource
from world.position import Position


@pytest.fixture
def descriptor():
    return {
        "grid_size": {"width": 5, "height": 4},
        "difficulty": "Normal",
        "creature_placement": {
            "creatures": [
                {"type": "Player", "is_player": True},
                {"type": "Enemy", "name": "Goblin", "position": {"x": 3, "y": 2}},
            ]
        },
        "world_objects": {
            "objects": [
                {"name": "Chest", "position": {"x": 0, "y": 0}, "item": {"preset": "Shield"}},
                {
                    "name": "Crate",
                    "position": {"x": 4, "y": 3},
                    "item": {
                        "type": "AttackItem",
                        "name": "Fire Wand",
                        "damage": {"fire": 8},
                    },
                },
            ]
        },
    }


def test_parse_normalizes_enums(descriptor):
    config = parse_world_config(descriptor)
    assert config.difficulty == DifficultyTier.NORMAL
    assert config.creature_placement.random is False
    enemy = config.creature_placement.creatures[1]
    assert enemy.type == CreatureType.ENEMY
    assert enemy.base_damage == {DamageKind.PHYSICAL: 10}


def test_build_world(descriptor):
    audit = MemoryAuditSink()
    world, player = build_world(
        parse_world_config(descriptor), ScriptedInputSource(), audit=audit
    )
    assert (world.width, world.height) == (5, 4)
    assert player.name == "Hero"
    assert player.position == Position(1, 1)
    assert player.tier == DifficultyTier.NORMAL
    goblin = world.get_creatures_at(Position(3, 2))[0]
    assert goblin.name == "Goblin"
    assert goblin.base_health == 100
    assert world.creatures()[0] is player
    chest, crate = world.world_objects()
    assert world.get_item_from_world_object(chest).name == "Shield"
    wand = world.get_item_from_world_object(crate)
    assert wand.damage_values() == {DamageKind.FIRE: 8}
    assert wand.range == 5
    assert len(audit.events) == 4


def test_random_placement(descriptor):
    descriptor["creature_placement"]["random"] = True
    del descriptor["creature_placement"]["creatures"][1]["position"]
    world, player = build_world(
        parse_world_config(descriptor), ScriptedInputSource(), rng=random.Random(1)
    )
    goblin = world.creatures()[1]
    assert world.get_position(goblin) != player.position


def test_missing_position_without_random(descriptor):
    del descriptor["creature_placement"]["creatures"][1]["position"]
    with pytest.raises(InvalidConfigurationError):
        build_world(parse_world_config(descriptor), ScriptedInputSource())


def test_position_out_of_bounds(descriptor):
    descriptor["world_objects"]["objects"][0]["position"] = {"x": 9, "y": 0}
    with pytest.raises(InvalidConfigurationError):
        build_world(parse_world_config(descriptor), ScriptedInputSource())


def test_duplicate_player(descriptor):
    descriptor["creature_placement"]["creatures"].append(
        {"type": "Player", "is_player": True}
    )
    with pytest.raises(InvalidConfigurationError):
        parse_world_config(descriptor)


def test_player_flag_requires_player_type(descriptor):
    descriptor["creature_placement"]["creatures"][0]["type"] = "Enemy"
    with pytest.raises(InvalidConfigurationError):
        parse_world_config(descriptor)


def test_unflagged_player_type_is_rejected(descriptor):
    descriptor["creature_placement"]["creatures"].append(
        {"type": "Player", "name": "Impostor", "position": {"x": 0, "y": 3}}
    )
    with pytest.raises(InvalidConfigurationError):
        parse_world_config(descriptor)


def test_missing_player(descriptor):
    del descriptor["creature_placement"]["creatures"][0]
    with pytest.raises(InvalidConfigurationError):
        parse_world_config(descriptor)


@pytest.mark.parametrize(
    "path, value",
    [
        (("difficulty",), "Nightmare"),
        (("grid_size", "width"), 0),
        (("creature_placement", "creatures", 1, "type"), "Dragon"),
    ],
)
def test_invalid_fields(descriptor, path, value):
    target = descriptor
    for key in path[:-1]:
        target = target[key]
    target[path[-1]] = value
    with pytest.raises(InvalidConfigurationError):
        parse_world_config(descriptor)


def test_unknown_item_type(descriptor):
    descriptor["world_objects"]["objects"][1]["item"]["type"] = "Potion"
    with pytest.raises(InvalidConfigurationError):
        parse_world_config(descriptor)


def test_unknown_preset(descriptor):
    descriptor["world_objects"]["objects"][0]["item"] = {"preset": "Excalibur"}
    with pytest.raises(InvalidConfigurationError):
        build_world(parse_world_config(descriptor), ScriptedInputSource())


def test_load_from_file(tmp_path, descriptor):
    path = tmp_path / "world.json"
    path.write_text(json.dumps(descriptor), encoding="utf-8")
    assert load_world_config(path).grid_size.width == 5


def test_load_missing_file(tmp_path):
    with pytest.raises(InvalidConfigurationError):
        load_world_config(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidConfigurationError):
        load_world_config(path)
