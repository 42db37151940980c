"""
Item factory module for the skirmish engine.

Creates items on demand, either from a named preset or from the fields of a
world descriptor entry.
"""

from collections.abc import Callable

from combat.damage import DamageProfile
from core.constants import DamageKind
from core.error_handling import InvalidConfigurationError

from items.item import AttackItem, DefenseItem, Item

ATTACK_ITEM = "AttackItem"
DEFENSE_ITEM = "DefenseItem"


class ItemFactory:
    """Registry of item presets, each built fresh on every request."""

    def __init__(self) -> None:
        self._creators: dict[str, Callable[[], Item]] = {
            "Sword": lambda: AttackItem(
                name="Sword",
                description="A sharp blade.",
                range=1,
                damage={DamageKind.PHYSICAL: 15},
            ),
            "Axe": lambda: AttackItem(
                name="Axe",
                description="A heavy axe with immense power.",
                range=1,
                damage={DamageKind.PHYSICAL: 20},
            ),
            "Bow": lambda: AttackItem(
                name="Bow",
                description="A long-range bow.",
                range=5,
                damage={DamageKind.PHYSICAL: 10},
            ),
            "Shield": lambda: DefenseItem(
                name="Shield",
                description="A sturdy shield.",
                defense={DamageKind.PHYSICAL: 5},
            ),
            "Armor": lambda: DefenseItem(
                name="Armor",
                description="Heavy armor for maximum protection.",
                defense={DamageKind.PHYSICAL: 10},
            ),
        }

    @property
    def presets(self) -> list[str]:
        """Returns the names of the available presets."""
        return sorted(self._creators)

    def register(self, name: str, creator: Callable[[], Item]) -> None:
        """Adds or replaces a preset."""
        self._creators[name] = creator

    def create_item(self, name: str) -> Item:
        """
        Builds a new item from a preset.

        Raises:
            InvalidConfigurationError: If no preset has that name.

        """
        creator = self._creators.get(name)
        if creator is None:
            raise InvalidConfigurationError(
                f"Item with name '{name}' not found in the factory."
            )
        return creator()

    def build(
        self,
        item_type: str,
        name: str,
        description: str = "",
        attack_range: int = 1,
        damage: DamageProfile | None = None,
        defense: DamageProfile | None = None,
    ) -> Item:
        """
        Builds an item from explicit fields.

        Args:
            item_type (str): Either "AttackItem" or "DefenseItem".
            name (str): The item name.
            description (str): The item description.
            attack_range (int): Reach of an attack item.
            damage (DamageProfile | None): Damage of an attack item.
            defense (DamageProfile | None): Defense of a defense item.

        Returns:
            Item: The new item.

        Raises:
            InvalidConfigurationError: If the type is unknown or the fields
                are invalid.

        """
        try:
            if item_type == ATTACK_ITEM:
                return AttackItem(
                    name=name,
                    description=description,
                    range=attack_range,
                    damage=dict(damage or {}),
                )
            if item_type == DEFENSE_ITEM:
                return DefenseItem(
                    name=name,
                    description=description,
                    defense=dict(defense or {}),
                )
        except ValueError as e:
            raise InvalidConfigurationError(f"Invalid item '{name}': {e}") from e
        raise InvalidConfigurationError(f"Unknown item type: {item_type}")
