"""
Damage modifier module for the skirmish engine.

A damage modifier is anything that wants a say in damage resolution (equipped
items, status effects). Every creature owns a ModifierChain that threads the
outgoing damage of its attacks through the attached modifiers, in insertion
order.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator

from pydantic import BaseModel, Field

from core.error_handling import ERROR_HANDLER, ErrorSeverity
from core.logging import log_debug


class DamageModifier(ABC):
    """Capability of adjusting a damage value during an attack."""

    @abstractmethod
    def apply(self, attacker: Any, defender: Any, damage: int) -> int:
        """
        Returns the adjusted damage.

        Implementations clamp their own output where needed and must not
        mutate the world or the creatures involved.

        Args:
            attacker (Any): The creature performing the attack.
            defender (Any): The creature being attacked.
            damage (int): The damage computed so far.

        Returns:
            int: The new damage value.

        """


class StatusModifier(BaseModel, DamageModifier):
    """
    A status effect adding a signed flat amount to outgoing damage.

    Positive amounts model buffs (rage, sharpened blade), negative amounts
    model debuffs (weakness). The result never drops below zero.
    """

    name: str = Field(description="The name of the status effect.")
    amount: int = Field(description="Flat damage added to each attack.")

    def apply(self, attacker: Any, defender: Any, damage: int) -> int:
        adjusted = max(0, damage + self.amount)
        log_debug(
            f"{self.name} adjusts damage {damage} -> {adjusted}",
            {"modifier": self.name},
        )
        return adjusted


class ScalingModifier(BaseModel, DamageModifier):
    """A status effect scaling outgoing damage by a percentage, rounded down."""

    name: str = Field(description="The name of the status effect.")
    percent: int = Field(description="Percentage applied to the damage.", ge=0)

    def apply(self, attacker: Any, defender: Any, damage: int) -> int:
        adjusted = max(0, damage * self.percent // 100)
        log_debug(
            f"{self.name} scales damage {damage} -> {adjusted}",
            {"modifier": self.name, "percent": self.percent},
        )
        return adjusted


class ModifierChain:
    """
    Ordered collection of damage modifiers owned by a single creature.

    Attributes:
        owner_name (str):
            The name of the owning creature, used in log context.

    """

    def __init__(self, owner_name: str = "") -> None:
        self.owner_name = owner_name
        self._modifiers: list[DamageModifier] = []

    def attach(self, modifier: DamageModifier) -> None:
        """Appends a modifier; it will be applied after the existing ones."""
        if not isinstance(modifier, DamageModifier):
            raise TypeError(
                f"Expected a DamageModifier, got {type(modifier).__name__}."
            )
        self._modifiers.append(modifier)

    def detach(self, modifier: DamageModifier) -> bool:
        """
        Removes a modifier, matched by identity.

        Returns:
            bool: True if the modifier was attached, False otherwise.

        """
        for index, attached in enumerate(self._modifiers):
            if attached is modifier:
                del self._modifiers[index]
                return True
        return False

    def notify(self, attacker: Any, defender: Any, damage: int) -> int:
        """
        Threads a damage value through every attached modifier, left to right.

        A modifier that fails, or returns something other than an integer,
        is skipped and the value it received is carried forward.

        Args:
            attacker (Any): The creature performing the attack.
            defender (Any): The creature being attacked.
            damage (int): The starting damage.

        Returns:
            int: The final damage.

        """
        current = damage
        for modifier in list(self._modifiers):
            context = {
                "owner": self.owner_name,
                "modifier": getattr(modifier, "name", type(modifier).__name__),
            }
            # Engine errors included: a failing modifier never aborts the chain.
            try:
                result = modifier.apply(attacker, defender, current)
            except Exception as e:
                ERROR_HANDLER.handle(
                    f"Damage modifier failed: {e}",
                    ErrorSeverity.MEDIUM,
                    context,
                    e,
                )
                continue
            if isinstance(result, bool) or not isinstance(result, int):
                ERROR_HANDLER.handle(
                    f"Damage modifier returned {result!r}, ignoring it",
                    ErrorSeverity.MEDIUM,
                    context,
                )
                continue
            current = result
        return current

    def __iter__(self) -> Iterator[DamageModifier]:
        return iter(list(self._modifiers))

    def __len__(self) -> int:
        return len(self._modifiers)

    def __contains__(self, modifier: object) -> bool:
        return any(attached is modifier for attached in self._modifiers)
