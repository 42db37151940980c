"""
Creature module for the skirmish engine.

Defines the Creature class: an actor of the world with hit points, attack and
defense inventories, a damage modifier chain, and a behavior that decides its
actions. A creature orchestrates a single turn through `perform_action`.
"""

from collections.abc import Callable

from catchery import log_warning
from combat.damage import (
    DamageProfile,
    DamageStrategy,
    DifficultyDamageStrategy,
    profile_total,
    validate_profile,
)
from combat.modifiers import ModifierChain
from core.audit import AuditSink
from core.constants import (
    ActionType,
    AuditAction,
    CreatureType,
    DamageKind,
    DifficultyTier,
    Direction,
    ItemCategory,
)
from core.error_handling import (
    InvalidConfigurationError,
    InvariantViolationError,
    require_enum_type,
    require_positive_int,
)
from core.logging import log_debug
from core.utils import make_bar
from items.attack_component import AttackComponent, AttackGroup
from items.item import Item
from pydantic import BaseModel, Field
from world.position import Position
from world.world import World

from creatures.behaviors import CreatureBehavior


class TurnOutcome(BaseModel):
    """The result of a single creature turn."""

    actor: str = Field(description="The name of the acting creature.")
    requested: ActionType = Field(description="The action the creature chose.")
    resolved: ActionType = Field(
        description="The action actually carried out; SKIP when it degraded."
    )
    success: bool = Field(description="Whether the requested action succeeded.")
    detail: str = Field(default="", description="Human readable description.")
    damage: int = Field(default=0, description="Damage dealt by an attack.")

    def __str__(self) -> str:
        return f"{self.actor}: {self.resolved} ({self.detail})"


class Creature:
    """
    An actor of the world.

    Attributes:
        name (str):
            The name of the creature; not required to be unique.
        creature_type (CreatureType):
            Whether the creature is the player or an enemy.
        base_health (int):
            The hit points the creature starts with.
        hp (int):
            The current hit points; may drop below zero.
        base_damage (DamageProfile):
            Damage dealt without any weapon, per damage kind.
        tier (DifficultyTier):
            The difficulty tier of the run.
        strategy (DamageStrategy):
            Turns the base damage profile into a scalar.
        attack_items (list[AttackComponent]):
            Equipped attack components, in equip order.
        defense_items (list[Item]):
            Equipped defense items, in equip order.
        modifiers (ModifierChain):
            The damage modifiers consulted when this creature attacks.
        behavior (CreatureBehavior):
            Decides the actions of the creature.
        world (World):
            The world the creature lives in.
        audit (AuditSink):
            Receiver of the creature's notifications.

    """

    def __init__(
        self,
        name: str,
        creature_type: CreatureType,
        base_health: int,
        base_damage: DamageProfile,
        tier: DifficultyTier,
        world: World,
        behavior: CreatureBehavior,
        strategy: DamageStrategy | None = None,
        audit: AuditSink | None = None,
    ) -> None:
        if not name:
            raise InvalidConfigurationError("Creature name must not be empty.")
        self.name = name
        self.creature_type = require_enum_type(
            creature_type, CreatureType, "creature_type", {"creature": name}
        )
        self.tier = require_enum_type(tier, DifficultyTier, "tier", {"creature": name})
        try:
            self.base_damage = validate_profile(dict(base_damage), f"{name}.base_damage")
        except ValueError as e:
            raise InvalidConfigurationError(str(e)) from e
        self.base_health = require_positive_int(
            base_health, "base_health", {"creature": name}
        )
        self.hp = self.base_health
        self.strategy: DamageStrategy = strategy or DifficultyDamageStrategy()
        self.attack_items: list[AttackComponent] = []
        self.defense_items: list[Item] = []
        self.modifiers = ModifierChain(owner_name=name)
        self.behavior = behavior
        self.world = world
        self.audit: AuditSink = audit or world.audit

        # Dispatch table of the turn state machine.
        self._actions: dict[ActionType, Callable[[], TurnOutcome]] = {
            ActionType.MOVE: self._do_move,
            ActionType.LOOT: self._do_loot,
            ActionType.ATTACK: self._do_attack,
            ActionType.SKIP: self._do_skip,
        }

    # ============================================================================
    # STATE
    # ============================================================================

    @property
    def colored_name(self) -> str:
        return self.creature_type.colorize(self.name)

    @property
    def position(self) -> Position:
        """The current position, as recorded by the world."""
        return self.world.get_position(self)

    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def total_defense(self) -> int:
        """Sum of every defense value of every equipped defense item."""
        return sum(profile_total(item.defense_values()) for item in self.defense_items)

    def get_status_line(self, show_bars: bool = True) -> str:
        """Returns a one-line rich summary of the creature."""
        status = f"{self.creature_type.emoji} {self.colored_name:<20}"
        status += f" HP: {self.hp:>4}/{self.base_health:<4}"
        if show_bars:
            status += " " + make_bar(self.hp, self.base_health, color="green")
        status += f" ⚔️  {len(self.attack_items)} 🛡️  {self.total_defense}"
        return status

    def __repr__(self) -> str:
        return f"Creature({self.name!r}, {self.creature_type}, hp={self.hp})"

    # ============================================================================
    # EQUIPMENT
    # ============================================================================

    def equip(self, item: Item | AttackGroup) -> ItemCategory:
        """
        Adds an item to the matching inventory and attaches it as a modifier.

        Args:
            item (Item | AttackGroup): The item or loadout to equip.

        Returns:
            ItemCategory: The inventory the item went to.

        Raises:
            InvariantViolationError: If the item is already equipped, or is
                an attack component owned by a group.

        """
        if isinstance(item, AttackGroup):
            category = ItemCategory.ATTACK
        elif isinstance(item, Item):
            category = item.category
        else:
            raise TypeError(f"Cannot equip {type(item).__name__}.")

        if any(equipped is item for equipped in self.attack_items + self.defense_items):
            raise InvariantViolationError(
                f"{item.name} is already equipped by {self.name}."
            )
        if isinstance(item, AttackComponent) and item.parent is not None:
            raise InvariantViolationError(
                f"{item.name} belongs to the group {item.parent.name}; "
                "equip the group instead."
            )

        if category == ItemCategory.ATTACK:
            if not isinstance(item, AttackComponent):
                raise TypeError(f"{item.name} is not an attack component.")
            self.attack_items.append(item)
        else:
            self.defense_items.append(item)
        self.modifiers.attach(item)
        log_debug(
            f"{self.name} equipped {item.name}",
            {"creature": self.name, "category": category},
        )
        return category

    def unequip(self, item: Item | AttackGroup) -> bool:
        """
        Removes an item from the inventories and detaches it.

        Returns:
            bool: True if the item was equipped, False otherwise.

        """
        for inventory in (self.attack_items, self.defense_items):
            for index, equipped in enumerate(inventory):
                if equipped is item:
                    del inventory[index]
                    self.modifiers.detach(item)
                    return True
        return False

    # ============================================================================
    # COMBAT
    # ============================================================================

    def calculate_damage(self) -> int:
        """Base damage from the strategy plus every equipped attack component."""
        damage = self.strategy.calculate(self.base_damage, self.tier)
        damage += sum(component.total_damage() for component in self.attack_items)
        return damage

    def attack(self, target: "Creature") -> int:
        """
        Strikes a target.

        The damage is threaded through this creature's modifier chain before
        being handed to the target.

        Returns:
            int: The damage sent to the target, before its mitigation.

        """
        base = self.calculate_damage()
        final = self.modifiers.notify(self, target, base)
        target.receive_damage(final)
        self.audit.record(
            self.name,
            AuditAction.ATTACK,
            f"Attacked {target.name} for {final} damage.",
        )
        return final

    def receive_damage(self, amount: int) -> int:
        """
        Applies incoming damage after flat, type-agnostic mitigation.

        Returns:
            int: The damage actually subtracted from the hit points.

        """
        defense = self.total_defense
        mitigated = max(0, amount - defense)
        self.hp -= mitigated
        self.audit.record(
            self.name,
            AuditAction.DAMAGE,
            f"{self.name} received {mitigated} damage after applying {defense} "
            f"defense. Remaining HP: {self.hp}",
        )
        return mitigated

    # ============================================================================
    # MOVEMENT AND LOOTING
    # ============================================================================

    def move(self, direction: Direction) -> bool:
        """
        Steps one cell in a direction, looting whatever lies there.

        Returns:
            bool: True if the creature moved, False if the cell was refused.

        """
        new_position = self.position.moved(direction)
        if not self.world.set_position(self, new_position):
            return False
        self.audit.record(
            self.name, AuditAction.MOVE, f"Moved to position {new_position}."
        )
        if self.world.has_lootable_at(new_position):
            self.loot()
        return True

    def loot(self) -> Item | None:
        """
        Loots the first lootable object on the current cell.

        The carried item, if any, moves from the world to the matching
        inventory and is attached as a modifier; a removable object is then
        removed from the world.

        Returns:
            Item | None: The looted item, or None if there was nothing to take.

        """
        world_object = self.world.get_lootable_object_at(self.position)
        if world_object is None:
            return None

        item = self.world.get_item_from_world_object(world_object)
        if item is not None:
            self.equip(item)
            self.world.remove_item_from_world_object(world_object)
            self.audit.record(
                self.name,
                AuditAction.LOOT,
                f"Looted item '{item.name}' from '{world_object.name}'.",
            )
        else:
            log_debug(f"'{world_object.name}' does not contain any items.")

        if world_object.removable:
            self.world.remove_world_object(world_object)
            log_debug(f"'{world_object.name}' has been removed from the world.")
        return item

    # ============================================================================
    # TURN STATE MACHINE
    # ============================================================================

    def perform_action(self) -> TurnOutcome:
        """
        Plays one turn: decide, then dispatch to the chosen action.

        Every action ends the turn; failed moves and attacks without a target
        degrade to a skip instead of raising.
        """
        action = self.behavior.decide_action(self)
        return self._actions[action]()

    def _degrade(self, requested: ActionType, reason: str) -> TurnOutcome:
        log_warning(
            reason,
            {"creature": self.name, "requested": str(requested)},
        )
        self.audit.record(self.name, AuditAction.SKIP, reason)
        return TurnOutcome(
            actor=self.name,
            requested=requested,
            resolved=ActionType.SKIP,
            success=False,
            detail=reason,
        )

    def _do_move(self) -> TurnOutcome:
        direction = self.behavior.choose_move_direction(self)
        if direction is None:
            return self._degrade(ActionType.MOVE, "Invalid input. Skipping move.")
        if not self.move(direction):
            return self._degrade(
                ActionType.MOVE, f"Cannot move {direction.display_name.lower()}."
            )
        return TurnOutcome(
            actor=self.name,
            requested=ActionType.MOVE,
            resolved=ActionType.MOVE,
            success=True,
            detail=f"Moved to {self.position}.",
        )

    def _do_loot(self) -> TurnOutcome:
        if not self.world.has_lootable_at(self.position):
            return self._degrade(ActionType.LOOT, "There is nothing to loot here.")
        item = self.loot()
        return TurnOutcome(
            actor=self.name,
            requested=ActionType.LOOT,
            resolved=ActionType.LOOT,
            success=True,
            detail=f"Looted {item.describe()}." if item is not None else "Found nothing.",
        )

    def _do_attack(self) -> TurnOutcome:
        direction = self.behavior.choose_attack_direction(self)
        if direction is None:
            return self._degrade(ActionType.ATTACK, "Invalid input. Skipping attack.")
        target = self.world.get_creature_in_direction(self.position, direction)
        if target is None:
            return self._degrade(ActionType.ATTACK, "No valid target to attack.")
        damage = self.attack(target)
        return TurnOutcome(
            actor=self.name,
            requested=ActionType.ATTACK,
            resolved=ActionType.ATTACK,
            success=True,
            detail=f"Attacked {target.name} for {damage} damage.",
            damage=damage,
        )

    def _do_skip(self) -> TurnOutcome:
        self.audit.record(self.name, AuditAction.SKIP, f"{self.name} skipped their turn.")
        return TurnOutcome(
            actor=self.name,
            requested=ActionType.SKIP,
            resolved=ActionType.SKIP,
            success=True,
            detail="Skipped the turn.",
        )


def make_player(
    world: World,
    behavior: CreatureBehavior,
    tier: DifficultyTier,
    name: str = "Hero",
    base_health: int = 100,
    base_damage: DamageProfile | None = None,
    strategy: DamageStrategy | None = None,
) -> Creature:
    """Creates a player creature; it still has to be placed in the world."""
    return Creature(
        name=name,
        creature_type=CreatureType.PLAYER,
        base_health=base_health,
        base_damage=base_damage if base_damage is not None else {DamageKind.PHYSICAL: 10},
        tier=tier,
        world=world,
        behavior=behavior,
        strategy=strategy,
    )


def make_enemy(
    world: World,
    behavior: CreatureBehavior,
    tier: DifficultyTier,
    name: str = "Enemy",
    base_health: int = 100,
    base_damage: DamageProfile | None = None,
    strategy: DamageStrategy | None = None,
) -> Creature:
    """Creates an enemy creature; it still has to be placed in the world."""
    return Creature(
        name=name,
        creature_type=CreatureType.ENEMY,
        base_health=base_health,
        base_damage=base_damage if base_damage is not None else {DamageKind.PHYSICAL: 10},
        tier=tier,
        world=world,
        behavior=behavior,
        strategy=strategy,
    )
