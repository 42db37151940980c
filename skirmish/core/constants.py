"""
Constants and enumerations for the skirmish engine.

Defines the enumerations shared across the engine: creature types, damage
kinds, difficulty tiers, action types, item categories, cardinal directions
and audit actions.
"""

from enum import Enum


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class CreatureType(NiceEnum):
    """Defines the type of creature in the world."""

    PLAYER = "PLAYER"
    ENEMY = "ENEMY"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this creature type."""
        return {
            CreatureType.PLAYER: "👤",
            CreatureType.ENEMY: "👹",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this creature type."""
        return {
            CreatureType.PLAYER: "bold blue",
            CreatureType.ENEMY: "bold red",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies creature type color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class DamageKind(NiceEnum):
    """Defines the kinds of damage an item or creature can deal or resist."""

    PHYSICAL = "PHYSICAL"
    FIRE = "FIRE"
    ICE = "ICE"
    POISON = "POISON"
    LIGHTNING = "LIGHTNING"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this damage kind."""
        return {
            DamageKind.PHYSICAL: "🗡️",
            DamageKind.FIRE: "🔥",
            DamageKind.ICE: "❄️",
            DamageKind.POISON: "☠️",
            DamageKind.LIGHTNING: "⚡",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this damage kind."""
        return {
            DamageKind.PHYSICAL: "bold yellow",
            DamageKind.FIRE: "bold red",
            DamageKind.ICE: "bold cyan",
            DamageKind.POISON: "bold green",
            DamageKind.LIGHTNING: "bold blue",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies damage kind color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class DifficultyTier(NiceEnum):
    """Difficulty selected once per run, scaling base damage."""

    EASY = "EASY"
    NORMAL = "NORMAL"
    HARD = "HARD"

    @property
    def multiplier(self) -> int:
        """Returns the integer damage multiplier of this tier."""
        return {
            DifficultyTier.EASY: 1,
            DifficultyTier.NORMAL: 2,
            DifficultyTier.HARD: 3,
        }[self]


class ActionType(NiceEnum):
    """The actions a creature can take during its turn."""

    MOVE = "MOVE"
    LOOT = "LOOT"
    ATTACK = "ATTACK"
    SKIP = "SKIP"

    @property
    def color(self) -> str:
        """Returns the color string associated with this action type."""
        return {
            ActionType.MOVE: "bold cyan",
            ActionType.LOOT: "bold green",
            ActionType.ATTACK: "bold red",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies action type color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class ItemCategory(NiceEnum):
    """Whether an item contributes to attacks or to defense."""

    ATTACK = "ATTACK"
    DEFENSE = "DEFENSE"


class Direction(NiceEnum):
    """The four cardinal directions, with their grid offsets."""

    UP = "UP"
    LEFT = "LEFT"
    DOWN = "DOWN"
    RIGHT = "RIGHT"

    @property
    def offset(self) -> tuple[int, int]:
        """Returns the (dx, dy) unit vector; y grows downwards."""
        return {
            Direction.UP: (0, -1),
            Direction.LEFT: (-1, 0),
            Direction.DOWN: (0, 1),
            Direction.RIGHT: (1, 0),
        }[self]

    @property
    def key(self) -> str:
        """Returns the input key bound to this direction."""
        return {
            Direction.UP: "w",
            Direction.LEFT: "a",
            Direction.DOWN: "s",
            Direction.RIGHT: "d",
        }[self]

    @staticmethod
    def from_key(key: str) -> "Direction | None":
        """Returns the direction bound to the given key, if any."""
        key = key.strip().lower()
        for direction in Direction:
            if direction.key == key:
                return direction
        return None


class AuditAction(NiceEnum):
    """Kinds of notifications sent to the audit sink."""

    PLACEMENT = "PLACEMENT"
    MOVE = "MOVE"
    LOOT = "LOOT"
    ATTACK = "ATTACK"
    DAMAGE = "DAMAGE"
    SKIP = "SKIP"
    DEATH = "DEATH"


def is_opponent(first: CreatureType, second: CreatureType) -> bool:
    """
    Checks whether two creature types are hostile to each other.

    Args:
        first (CreatureType): The first creature type.
        second (CreatureType): The second creature type.

    Returns:
        bool: True if the two types are opponents, False otherwise.

    """
    return first != second
