"""
World descriptor module for the skirmish engine.

A world descriptor is a JSON document describing the grid, the difficulty,
the creatures and the world objects of a run. It is validated with pydantic
and turned into a populated World by `build_world`.

Example:
    {
        "grid_size": {"width": 10, "height": 10},
        "difficulty": "Normal",
        "creature_placement": {
            "random": false,
            "creatures": [
                {"type": "Player", "is_player": true},
                {"type": "Enemy", "position": {"x": 5, "y": 5}}
            ]
        },
        "world_objects": {
            "random": true,
            "objects": [
                {"name": "Chest", "item": {"preset": "Sword"}}
            ]
        }
    }
"""

import json
import random
from pathlib import Path
from typing import Any

from combat.damage import DamageProfile, DamageStrategy
from core.audit import AuditSink
from core.constants import CreatureType, DamageKind, DifficultyTier
from core.error_handling import InvalidConfigurationError
from core.logging import log_debug, log_info
from creatures.behaviors import CreatureBehavior, EnemyBehavior, PlayerBehavior
from creatures.creature import Creature
from items.item import Item
from items.item_factory import ATTACK_ITEM, DEFENSE_ITEM, ItemFactory
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from ui.input_source import InputSource
from world.position import Position
from world.world import World
from world.world_object import WorldObject

DEFAULT_HEALTH = 100
DEFAULT_DAMAGE: dict[DamageKind, int] = {DamageKind.PHYSICAL: 10}
DEFAULT_PLAYER_NAME = "Hero"
DEFAULT_PLAYER_POSITION = Position(1, 1)


def _upper(value: Any) -> Any:
    # Enumerated values are matched case-insensitively.
    return value.upper() if isinstance(value, str) else value


def _upper_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {_upper(key): magnitude for key, magnitude in value.items()}
    return value


class GridSize(BaseModel):
    width: int = Field(gt=0, description="Number of columns.")
    height: int = Field(gt=0, description="Number of rows.")


class PositionDescriptor(BaseModel):
    x: int = Field(ge=0)
    y: int = Field(ge=0)

    def to_position(self) -> Position:
        return Position(self.x, self.y)


class CreatureDescriptor(BaseModel):
    """A creature entry of the descriptor."""

    type: CreatureType = Field(description="The creature type.")
    is_player: bool = Field(default=False, description="Marks the player.")
    name: str | None = Field(default=None, description="Defaults per type.")
    base_health: int = Field(default=DEFAULT_HEALTH, gt=0)
    base_damage: dict[DamageKind, int] = Field(
        default_factory=lambda: dict(DEFAULT_DAMAGE),
        description="Base damage per damage kind.",
    )
    position: PositionDescriptor | None = Field(default=None)

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        return _upper(v)

    @field_validator("base_damage", mode="before")
    @classmethod
    def normalize_damage(cls, v: Any) -> Any:
        return _upper_keys(v)

    @field_validator("base_damage")
    @classmethod
    def non_negative_damage(cls, v: dict[DamageKind, int]) -> dict[DamageKind, int]:
        for kind, magnitude in v.items():
            if magnitude < 0:
                raise ValueError(f"base damage of {kind} must be non-negative")
        return v


class ItemDescriptor(BaseModel):
    """
    An item carried by a world object.

    Either names a preset of the item factory, or gives the item type and its
    fields explicitly.
    """

    preset: str | None = Field(default=None, description="Name of a factory preset.")
    type: str | None = Field(default=None, description="AttackItem or DefenseItem.")
    name: str | None = Field(default=None)
    description: str = Field(default="")
    range: int = Field(default=5, ge=0)
    damage: dict[DamageKind, int] = Field(default_factory=dict)
    defense: dict[DamageKind, int] = Field(default_factory=dict)

    @field_validator("damage", "defense", mode="before")
    @classmethod
    def normalize_profiles(cls, v: Any) -> Any:
        return _upper_keys(v)

    @field_validator("damage", "defense")
    @classmethod
    def non_negative_profiles(cls, v: dict[DamageKind, int]) -> dict[DamageKind, int]:
        for kind, magnitude in v.items():
            if magnitude < 0:
                raise ValueError(f"magnitude of {kind} must be non-negative")
        return v

    @model_validator(mode="after")
    def check_kind(self) -> "ItemDescriptor":
        if self.preset is not None:
            return self
        if self.type not in (ATTACK_ITEM, DEFENSE_ITEM):
            raise ValueError(
                f"item type must be '{ATTACK_ITEM}' or '{DEFENSE_ITEM}', got {self.type!r}"
            )
        if not self.name:
            raise ValueError("item name is required")
        return self

    def build(self, factory: ItemFactory) -> Item:
        if self.preset is not None:
            return factory.create_item(self.preset)
        return factory.build(
            self.type or "",
            self.name or "",
            description=self.description,
            attack_range=self.range,
            damage=self.damage,
            defense=self.defense,
        )


class WorldObjectDescriptor(BaseModel):
    name: str = Field(min_length=1)
    lootable: bool = Field(default=True)
    removable: bool = Field(default=True)
    position: PositionDescriptor | None = Field(default=None)
    item: ItemDescriptor | None = Field(default=None)


class CreaturePlacement(BaseModel):
    random: bool = Field(default=False, description="Place enemies randomly.")
    creatures: list[CreatureDescriptor] = Field(default_factory=list)


class WorldObjectPlacement(BaseModel):
    random: bool = Field(default=False, description="Place objects randomly.")
    objects: list[WorldObjectDescriptor] = Field(default_factory=list)


class WorldConfig(BaseModel):
    """The root of a world descriptor."""

    grid_size: GridSize
    difficulty: DifficultyTier
    creature_placement: CreaturePlacement
    world_objects: WorldObjectPlacement = Field(default_factory=WorldObjectPlacement)

    @field_validator("difficulty", mode="before")
    @classmethod
    def normalize_difficulty(cls, v: Any) -> Any:
        return _upper(v)

    @model_validator(mode="after")
    def check_player(self) -> "WorldConfig":
        players = [c for c in self.creature_placement.creatures if c.is_player]
        if len(players) > 1:
            raise ValueError(
                "Multiple players found in the configuration. Only one player is allowed."
            )
        if not players:
            raise ValueError("Player not found in the configuration.")
        if players[0].type != CreatureType.PLAYER:
            raise ValueError(
                f"The player entry must have type '{CreatureType.PLAYER.display_name}', "
                f"got '{players[0].type.display_name}'."
            )
        for creature in self.creature_placement.creatures:
            if creature.type == CreatureType.PLAYER and not creature.is_player:
                raise ValueError(
                    "Creatures of type "
                    f"'{CreatureType.PLAYER.display_name}' must be flagged is_player."
                )
        return self


def parse_world_config(data: dict[str, Any]) -> WorldConfig:
    """
    Validates a world descriptor given as plain data.

    Raises:
        InvalidConfigurationError: If the descriptor is malformed.

    """
    try:
        return WorldConfig.model_validate(data)
    except ValidationError as e:
        raise InvalidConfigurationError(f"Invalid world descriptor: {e}") from e


def load_world_config(path: str | Path) -> WorldConfig:
    """
    Loads and validates a world descriptor from a JSON file.

    Args:
        path (str | Path): The descriptor file.

    Returns:
        WorldConfig: The validated descriptor.

    Raises:
        InvalidConfigurationError: If the file cannot be read or is malformed.

    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise InvalidConfigurationError(f"Configuration file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise InvalidConfigurationError(f"Invalid JSON in {path}: {e}") from e
    log_debug(f"Loaded world descriptor from {path}")
    return parse_world_config(data)


def _placement(
    world: World,
    position: PositionDescriptor | None,
    random_placement: bool,
    what: str,
    rng: random.Random,
) -> Position:
    if random_placement:
        return world.random_free_position(rng)
    if position is None:
        raise InvalidConfigurationError(
            f"Position is missing for {what} when random placement is disabled."
        )
    target = position.to_position()
    if not world.is_within_bounds(target):
        raise InvalidConfigurationError(
            f"Position {target} of {what} is outside the "
            f"{world.width}x{world.height} grid."
        )
    return target


def build_world(
    config: WorldConfig,
    input_source: InputSource,
    strategy: DamageStrategy | None = None,
    audit: AuditSink | None = None,
    rng: random.Random | None = None,
    enemy_behavior: CreatureBehavior | None = None,
    item_factory: ItemFactory | None = None,
) -> tuple[World, Creature]:
    """
    Builds a populated World from a validated descriptor.

    The player is placed first, at its given position or (1, 1); enemies and
    world objects follow, in descriptor order.

    Args:
        config (WorldConfig): The validated descriptor.
        input_source (InputSource): Feeds the player's decisions.
        strategy (DamageStrategy | None): Shared by every creature.
        audit (AuditSink | None): Receives the notifications of the run.
        rng (random.Random | None): Used for random placement.
        enemy_behavior (CreatureBehavior | None): Defaults to EnemyBehavior.
        item_factory (ItemFactory | None): Builds the carried items.

    Returns:
        tuple[World, Creature]: The world and its player.

    Raises:
        InvalidConfigurationError: If a position is missing, out of bounds or
            taken, or an item cannot be built.

    """
    rng = rng or random.Random()
    factory = item_factory or ItemFactory()
    enemy_behavior = enemy_behavior or EnemyBehavior()
    world = World(config.grid_size.width, config.grid_size.height, audit=audit)
    tier = config.difficulty
    creatures = config.creature_placement.creatures

    player_descriptor = next(c for c in creatures if c.is_player)
    player = _make_creature(
        player_descriptor,
        player_descriptor.name or DEFAULT_PLAYER_NAME,
        world,
        tier,
        PlayerBehavior(input_source),
        strategy,
        audit,
    )
    player_position = (
        player_descriptor.position.to_position()
        if player_descriptor.position is not None
        else DEFAULT_PLAYER_POSITION
    )
    _add_creature(world, player, player_position)

    for descriptor in creatures:
        if descriptor.is_player:
            continue
        name = descriptor.name or descriptor.type.display_name
        enemy = _make_creature(
            descriptor, name, world, tier, enemy_behavior, strategy, audit
        )
        position = _placement(
            world,
            descriptor.position,
            config.creature_placement.random,
            f"creature '{name}'",
            rng,
        )
        _add_creature(world, enemy, position)

    for descriptor in config.world_objects.objects:
        world_object = WorldObject(
            descriptor.name,
            lootable=descriptor.lootable,
            removable=descriptor.removable,
        )
        item = descriptor.item.build(factory) if descriptor.item is not None else None
        position = _placement(
            world,
            descriptor.position,
            config.world_objects.random,
            f"WorldObject '{descriptor.name}'",
            rng,
        )
        world.add_world_object_with_item(world_object, item, position)

    log_info(
        f"Built a {world.width}x{world.height} world",
        {
            "difficulty": tier,
            "creatures": len(world.creatures()),
            "objects": len(world.world_objects()),
        },
    )
    return world, player


def _make_creature(
    descriptor: CreatureDescriptor,
    name: str,
    world: World,
    tier: DifficultyTier,
    behavior: CreatureBehavior,
    strategy: DamageStrategy | None,
    audit: AuditSink | None,
) -> Creature:
    base_damage: DamageProfile = dict(descriptor.base_damage)
    return Creature(
        name=name,
        creature_type=descriptor.type,
        base_health=descriptor.base_health,
        base_damage=base_damage,
        tier=tier,
        world=world,
        behavior=behavior,
        strategy=strategy,
        audit=audit,
    )


def _add_creature(world: World, creature: Creature, position: Position) -> None:
    if not world.is_within_bounds(position):
        raise InvalidConfigurationError(
            f"Position {position} of creature '{creature.name}' is outside the "
            f"{world.width}x{world.height} grid."
        )
    if world.get_creatures_at(position):
        raise InvalidConfigurationError(
            f"Cannot place '{creature.name}' at {position}: cell is occupied."
        )
    world.add_creature(creature, position)
