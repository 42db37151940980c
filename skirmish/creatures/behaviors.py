"""
Creature behaviors for the skirmish engine.

A behavior is the variant-specific part of a creature: it decides which
action to take and which direction to move or strike in. The mechanics of
moving, looting and attacking live on the Creature and are shared by every
variant.
"""

from abc import ABC, abstractmethod
from typing import Any

from catchery import log_warning
from core.constants import ActionType, Direction, is_opponent
from ui.input_source import InputSource

ACTION_KEYS: dict[str, ActionType] = {
    "m": ActionType.MOVE,
    "a": ActionType.ATTACK,
    "l": ActionType.LOOT,
    "s": ActionType.SKIP,
}

DIRECTION_PROMPT = "Choose a direction to {verb}: (w) Up, (a) Left, (s) Down, (d) Right"


def adjacent_opponents(creature: Any) -> list[tuple[Direction, Any]]:
    """
    Lists the opposing creatures on the four cardinal neighbour cells.

    Args:
        creature (Any): The creature looking around.

    Returns:
        list[tuple[Direction, Any]]: Pairs of direction and opponent, in
            Direction order (up, left, down, right).

    """
    position = creature.position
    found = []
    for direction in Direction:
        other = creature.world.get_creature_in_direction(position, direction)
        if other is not None and is_opponent(creature.creature_type, other.creature_type):
            found.append((direction, other))
    return found


class CreatureBehavior(ABC):
    """Decision table of a creature variant."""

    @abstractmethod
    def decide_action(self, creature: Any) -> ActionType:
        """Chooses the action of the turn."""

    @abstractmethod
    def choose_move_direction(self, creature: Any) -> Direction | None:
        """Chooses where to move; None means no valid choice was made."""

    @abstractmethod
    def choose_attack_direction(self, creature: Any) -> Direction | None:
        """Chooses where to strike; None means no valid choice was made."""


class PlayerBehavior(CreatureBehavior):
    """
    Interactive decisions read from an input source.

    Attack is only offered when an opponent is adjacent and loot only when a
    lootable object lies underfoot; choosing an option that is not offered,
    or typing an unknown token, skips the turn.
    """

    def __init__(self, input_source: InputSource) -> None:
        self.input_source = input_source

    def decide_action(self, creature: Any) -> ActionType:
        can_attack = bool(adjacent_opponents(creature))
        can_loot = creature.world.has_lootable_at(creature.position)

        options = ["(m) Move"]
        if can_attack:
            options.append("(a) Attack")
        if can_loot:
            options.append("(l) Loot")
        options.append("(s) Skip")

        notes = []
        if can_loot:
            notes.append("There is something to loot here.")
        if can_attack:
            notes.append("An enemy is in range for attack.")
        prompt = " ".join(notes + ["Choose an action: " + ", ".join(options)])

        token = self.input_source.read_token(prompt)
        action = ACTION_KEYS.get(token)
        if action is None:
            log_warning(
                f"Invalid action '{token}', skipping turn",
                {"creature": creature.name, "token": token},
            )
            return ActionType.SKIP
        if action == ActionType.ATTACK and not can_attack:
            log_warning(
                "No enemy in range, skipping turn",
                {"creature": creature.name, "token": token},
            )
            return ActionType.SKIP
        if action == ActionType.LOOT and not can_loot:
            log_warning(
                "Nothing to loot here, skipping turn",
                {"creature": creature.name, "token": token},
            )
            return ActionType.SKIP
        return action

    def choose_move_direction(self, creature: Any) -> Direction | None:
        token = self.input_source.read_token(DIRECTION_PROMPT.format(verb="move"))
        return Direction.from_key(token)

    def choose_attack_direction(self, creature: Any) -> Direction | None:
        token = self.input_source.read_token(DIRECTION_PROMPT.format(verb="attack"))
        return Direction.from_key(token)


class EnemyBehavior(CreatureBehavior):
    """Stands its ground and strikes the first adjacent opponent."""

    def decide_action(self, creature: Any) -> ActionType:
        if adjacent_opponents(creature):
            return ActionType.ATTACK
        return ActionType.SKIP

    def choose_move_direction(self, creature: Any) -> Direction | None:
        return None

    def choose_attack_direction(self, creature: Any) -> Direction | None:
        opponents = adjacent_opponents(creature)
        return opponents[0][0] if opponents else None


class IdleBehavior(CreatureBehavior):
    """Never does anything."""

    def decide_action(self, creature: Any) -> ActionType:
        return ActionType.SKIP

    def choose_move_direction(self, creature: Any) -> Direction | None:
        return None

    def choose_attack_direction(self, creature: Any) -> Direction | None:
        return None
