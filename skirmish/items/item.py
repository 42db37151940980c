"""
Item module for the skirmish engine.

Defines the items creatures can loot: attack items (leaves of the attack
tree), defense items, and decorators that wrap another item and add to one of
its two profiles while delegating everything else.
"""

from abc import abstractmethod
from typing import Any, ClassVar

from combat.damage import (
    DamageProfile,
    describe_profile,
    merge_profiles,
    profile_total,
    validate_profile,
)
from combat.modifiers import DamageModifier
from core.constants import DamageKind, ItemCategory
from core.logging import log_debug
from pydantic import BaseModel, Field, PrivateAttr

from items.attack_component import AttackComponent


class Item(BaseModel, DamageModifier):
    """
    Base class of every item.

    An item reports a damage contribution and a defense contribution. It is
    owned by exactly one holder at a time: a world object (through the
    world's association table) or a creature's inventory.
    """

    name: str = Field(
        default="",
        description="The name of the item.",
    )
    description: str = Field(
        default="",
        description="A brief description of the item.",
    )

    # Set by AttackGroup when the item becomes one of its children.
    _parent_group: Any = PrivateAttr(default=None)

    def model_post_init(self, _: Any) -> None:
        if not self.name:
            raise ValueError("Item name must not be empty.")

    @property
    @abstractmethod
    def category(self) -> ItemCategory:
        """Whether the item goes to the attack or the defense inventory."""

    @abstractmethod
    def damage_values(self) -> DamageProfile:
        """Returns a fresh copy of the damage profile of the item."""

    @abstractmethod
    def defense_values(self) -> DamageProfile:
        """Returns a fresh copy of the defense profile of the item."""

    @property
    def colored_name(self) -> str:
        color = "bold red" if self.category == ItemCategory.ATTACK else "bold green"
        return f"[{color}]{self.name}[/]"

    def describe(self) -> str:
        """Returns a one-line rich description of the item."""
        if self.category == ItemCategory.ATTACK:
            return f"{self.colored_name}: {describe_profile(self.damage_values())}"
        return f"{self.colored_name}: defense {describe_profile(self.defense_values())}"


class AttackItem(Item, AttackComponent):
    """
    A single weapon: a leaf of the attack tree.

    Its damage is added once, through the owner's attack inventory. Attached
    to its owner's modifier chain it leaves the running damage untouched.
    """

    range: int = Field(
        default=1,
        description="Reach of the weapon, in cells.",
        ge=0,
    )
    damage: DamageProfile = Field(
        default_factory=dict,
        description="Damage added by the weapon, per damage kind.",
    )

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        validate_profile(self.damage, f"{self.name}.damage")

    @property
    def category(self) -> ItemCategory:
        return ItemCategory.ATTACK

    def add_damage(self, kind: DamageKind, value: int) -> None:
        """Adds `value` to the magnitude of the given damage kind."""
        if value < 0:
            raise ValueError(f"Damage added to {self.name} must be non-negative.")
        self.damage[kind] = self.damage.get(kind, 0) + value

    def damage_values(self) -> DamageProfile:
        return dict(self.damage)

    def defense_values(self) -> DamageProfile:
        return {}

    def total_damage(self) -> int:
        return profile_total(self.damage)

    def apply(self, attacker: Any, defender: Any, damage: int) -> int:
        log_debug(
            f"{self.name} contributes {self.total_damage()} damage",
            {"item": self.name},
        )
        return damage


class DefenseItem(Item):
    """
    A piece of protective gear.

    Its defense is subtracted once, when its owner receives damage. Attached
    to its owner's modifier chain it leaves outgoing damage untouched.
    """

    defense: DamageProfile = Field(
        default_factory=dict,
        description="Mitigation provided by the item, per damage kind.",
    )

    def model_post_init(self, _: Any) -> None:
        super().model_post_init(_)
        validate_profile(self.defense, f"{self.name}.defense")

    @property
    def category(self) -> ItemCategory:
        return ItemCategory.DEFENSE

    def add_defense(self, kind: DamageKind, value: int) -> None:
        """Adds `value` to the mitigation of the given damage kind."""
        if value < 0:
            raise ValueError(f"Defense added to {self.name} must be non-negative.")
        self.defense[kind] = self.defense.get(kind, 0) + value

    def damage_values(self) -> DamageProfile:
        return {}

    def defense_values(self) -> DamageProfile:
        return dict(self.defense)

    def apply(self, attacker: Any, defender: Any, damage: int) -> int:
        return damage


class ItemDecorator(Item, AttackComponent):
    """
    Wraps another item and delegates both profiles to it.

    A decorator takes the name and description of the item it wraps unless
    given its own, keeps its category, and behaves as a leaf of the attack
    tree. Concrete decorators only wrap items of the category whose profile
    they extend.
    """

    wraps: ClassVar[ItemCategory | None] = None

    item: Item = Field(
        description="The wrapped item, exclusively owned by this decorator.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.wraps is not None and self.item.category != self.wraps:
            raise ValueError(
                f"{type(self).__name__} wraps {self.wraps.display_name.lower()} items, "
                f"got {self.item.category.display_name.lower()} item '{self.item.name}'."
            )
        self.name = self.name or self.item.name
        self.description = self.description or self.item.description
        super().model_post_init(_)

    @property
    def category(self) -> ItemCategory:
        return self.item.category

    @property
    def base_item(self) -> Item:
        """Returns the innermost, undecorated item."""
        item = self.item
        while isinstance(item, ItemDecorator):
            item = item.item
        return item

    def damage_values(self) -> DamageProfile:
        return self.item.damage_values()

    def defense_values(self) -> DamageProfile:
        return self.item.defense_values()

    def total_damage(self) -> int:
        return profile_total(self.damage_values())

    def apply(self, attacker: Any, defender: Any, damage: int) -> int:
        return self.item.apply(attacker, defender, damage)


class DamageDecorator(ItemDecorator):
    """Adds a fixed amount of one damage kind to the wrapped item."""

    wraps: ClassVar[ItemCategory | None] = ItemCategory.ATTACK

    kind: DamageKind = Field(description="The damage kind to add.")
    value: int = Field(description="The magnitude to add.", ge=0)

    def damage_values(self) -> DamageProfile:
        return merge_profiles(self.item.damage_values(), {self.kind: self.value})


class DefenseDecorator(ItemDecorator):
    """Adds a fixed amount of one defense kind to the wrapped item."""

    wraps: ClassVar[ItemCategory | None] = ItemCategory.DEFENSE

    kind: DamageKind = Field(description="The defense kind to add.")
    value: int = Field(description="The magnitude to add.", ge=0)

    def defense_values(self) -> DamageProfile:
        return merge_profiles(self.item.defense_values(), {self.kind: self.value})
