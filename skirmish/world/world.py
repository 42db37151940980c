"""
World module for the skirmish engine.

The World is the spatial index of a run: it maps creatures and world objects
to grid cells, owns the association between world objects and the items they
carry, and answers the directional queries the creatures need to act.
"""

import random
from typing import Any

from core.audit import AuditSink, LoggingAuditSink
from core.constants import AuditAction, CreatureType, Direction
from core.error_handling import InvariantViolationError, require_positive_int
from core.logging import log_debug
from items.item import Item

from world.position import Position
from world.snapshot import CreatureMarker, ObjectMarker, WorldSnapshot
from world.world_object import WorldObject


class World:
    """
    A bounded grid holding creatures and world objects.

    Invariants:
        - every stored position satisfies 0 <= x < width and 0 <= y < height;
        - at most one creature occupies a cell;
        - a world object carries at most one item.

    Attributes:
        width (int):
            Number of columns of the grid.
        height (int):
            Number of rows of the grid.
        audit (AuditSink):
            Receiver of placement notifications.

    """

    def __init__(self, width: int, height: int, audit: AuditSink | None = None) -> None:
        self.width = require_positive_int(width, "width")
        self.height = require_positive_int(height, "height")
        self.audit: AuditSink = audit or LoggingAuditSink()
        # Indexed as [y][x]; every cell starts walkable.
        self._walkable: list[list[bool]] = [
            [True for _ in range(width)] for _ in range(height)
        ]
        self._creature_positions: dict[Any, Position] = {}
        self._object_positions: dict[WorldObject, Position] = {}
        self._object_items: dict[WorldObject, Item] = {}

    # ==========================================================================
    # GRID
    # ==========================================================================

    def is_within_bounds(self, position: Position) -> bool:
        """Checks whether the position lies inside the grid."""
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def _require_within_bounds(self, position: Position, what: str) -> None:
        if not self.is_within_bounds(position):
            raise InvariantViolationError(
                f"{what} at {position} is outside the {self.width}x{self.height} grid."
            )

    def is_walkable(self, position: Position) -> bool:
        """
        Checks whether a creature may stand on the cell.

        A cell is walkable when it is inside the grid, marked walkable, and
        holds no object that blocks movement.
        """
        if not self.is_within_bounds(position):
            return False
        if not self._walkable[position.y][position.x]:
            return False
        return all(obj.walkable for obj in self.get_world_objects_at(position))

    def set_walkable(self, position: Position, walkable: bool) -> None:
        """Marks a cell as walkable or blocked."""
        self._require_within_bounds(position, "Cell")
        self._walkable[position.y][position.x] = walkable

    # ==========================================================================
    # CREATURES
    # ==========================================================================

    def add_creature(self, creature: Any, position: Position) -> None:
        """
        Places a creature on the grid.

        Raises:
            InvariantViolationError: If the position is out of bounds, the
                cell is occupied, or the creature is already placed.

        """
        self._require_within_bounds(position, f"Creature '{creature.name}'")
        if creature in self._creature_positions:
            raise InvariantViolationError(
                f"Creature '{creature.name}' is already in the world."
            )
        if self.get_creatures_at(position):
            raise InvariantViolationError(
                f"Cannot place '{creature.name}' at {position}: cell is occupied."
            )
        self._creature_positions[creature] = position
        self.audit.record(
            "World",
            AuditAction.PLACEMENT,
            f"Creature '{creature.name}' added at position {position}.",
        )

    def remove_creature(self, creature: Any) -> bool:
        """
        Removes a creature from the grid.

        Returns:
            bool: True if the creature was in the world, False otherwise.

        """
        if self._creature_positions.pop(creature, None) is None:
            return False
        log_debug(f"Creature '{creature.name}' removed from the world.")
        return True

    def has_creature(self, creature: Any) -> bool:
        return creature in self._creature_positions

    def creatures(self) -> list[Any]:
        """Returns the creatures in the world, in placement order."""
        return list(self._creature_positions)

    def get_position(self, creature: Any) -> Position:
        """
        Returns the position of a creature.

        Raises:
            InvariantViolationError: If the creature was never placed.

        """
        try:
            return self._creature_positions[creature]
        except KeyError:
            raise InvariantViolationError(
                f"Creature '{creature.name}' not found in world."
            ) from None

    def set_position(self, creature: Any, new_position: Position) -> bool:
        """
        Moves a creature, enforcing bounds, walkability and occupancy.

        This is the only path through which creatures move.

        Returns:
            bool: True if the creature moved, False if the move was refused
                (nothing is changed in that case).

        Raises:
            InvariantViolationError: If the creature was never placed.

        """
        self.get_position(creature)
        if not self.is_within_bounds(new_position):
            log_debug(f"The position {new_position} is out of bounds.")
            return False
        if not self.is_walkable(new_position):
            log_debug(f"The position {new_position} is not walkable.")
            return False
        if any(other is not creature for other in self.get_creatures_at(new_position)):
            log_debug(f"The position {new_position} is already occupied.")
            return False
        self._creature_positions[creature] = new_position
        return True

    def get_creatures_at(self, position: Position) -> list[Any]:
        """Returns the creatures standing on a cell (at most one)."""
        return [
            creature
            for creature, pos in self._creature_positions.items()
            if pos == position
        ]

    def get_creature_in_direction(self, position: Position, direction: Direction) -> Any | None:
        """Returns the creature on the neighbouring cell, if any."""
        target = position.moved(direction)
        if not self.is_within_bounds(target):
            return None
        return next(iter(self.get_creatures_at(target)), None)

    # ==========================================================================
    # WORLD OBJECTS
    # ==========================================================================

    def add_world_object_with_item(
        self,
        world_object: WorldObject,
        item: Item | None,
        position: Position,
    ) -> None:
        """
        Places a world object, optionally carrying an item.

        Raises:
            InvariantViolationError: If the position is out of bounds, or
                the item is already carried by another world object.

        """
        self._require_within_bounds(position, f"WorldObject '{world_object.name}'")
        if item is not None:
            for owner, carried in self._object_items.items():
                if carried is item and owner is not world_object:
                    raise InvariantViolationError(
                        f"Item '{item.name}' is already carried by '{owner.name}'."
                    )
        self._object_positions[world_object] = position
        if item is not None:
            self._object_items[world_object] = item
        self.audit.record(
            "World",
            AuditAction.PLACEMENT,
            f"WorldObject '{world_object.name}' placed at {position}"
            + (f" carrying '{item.name}'." if item is not None else "."),
        )

    def add_world_object(self, world_object: WorldObject, position: Position) -> None:
        """Places a world object carrying no item."""
        self.add_world_object_with_item(world_object, None, position)

    def world_objects(self) -> list[WorldObject]:
        """Returns the world objects, in placement order."""
        return list(self._object_positions)

    def get_object_position(self, world_object: WorldObject) -> Position:
        """
        Returns the position of a world object.

        Raises:
            InvariantViolationError: If the object was never placed.

        """
        try:
            return self._object_positions[world_object]
        except KeyError:
            raise InvariantViolationError(
                f"WorldObject '{world_object.name}' not found in world."
            ) from None

    def get_world_objects_at(self, position: Position) -> list[WorldObject]:
        return [
            world_object
            for world_object, pos in self._object_positions.items()
            if pos == position
        ]

    def get_lootable_object_at(self, position: Position) -> WorldObject | None:
        """Returns the first lootable world object on a cell, if any."""
        return next(
            (obj for obj in self.get_world_objects_at(position) if obj.lootable),
            None,
        )

    def has_lootable_at(self, position: Position) -> bool:
        return self.get_lootable_object_at(position) is not None

    def get_item_from_world_object(self, world_object: WorldObject) -> Item | None:
        return self._object_items.get(world_object)

    def remove_item_from_world_object(self, world_object: WorldObject) -> Item | None:
        """
        Detaches the item carried by a world object.

        Returns:
            Item | None: The detached item, or None if there was none.

        """
        return self._object_items.pop(world_object, None)

    def remove_world_object(self, world_object: WorldObject) -> bool:
        """
        Removes a world object and any item it still carries.

        Returns:
            bool: True if the object was in the world, False otherwise.

        """
        if self._object_positions.pop(world_object, None) is None:
            return False
        self._object_items.pop(world_object, None)
        return True

    # ==========================================================================
    # QUERIES
    # ==========================================================================

    def is_position_in_range(self, current: Position, target: Position, reach: float) -> bool:
        """Checks whether the Euclidean distance between two cells is within reach."""
        return current.distance_to(target) <= reach

    def random_free_position(self, rng: random.Random | None = None) -> Position:
        """
        Picks a random walkable cell holding neither a creature nor an object.

        Raises:
            InvariantViolationError: If no such cell exists.

        """
        rng = rng or random.Random()
        occupied = set(self._creature_positions.values())
        occupied.update(self._object_positions.values())
        free = [
            Position(x, y)
            for y in range(self.height)
            for x in range(self.width)
            if Position(x, y) not in occupied and self._walkable[y][x]
        ]
        if not free:
            raise InvariantViolationError("No free cell left in the world.")
        return rng.choice(free)

    def snapshot(self, player: Any | None = None) -> WorldSnapshot:
        """Returns a read-only view of the world for the render sink."""
        return WorldSnapshot(
            width=self.width,
            height=self.height,
            walkable=[list(row) for row in self._walkable],
            creatures=[
                CreatureMarker(
                    name=creature.name,
                    x=pos.x,
                    y=pos.y,
                    hp=creature.hp,
                    max_hp=creature.base_health,
                    is_player=(
                        creature is player
                        if player is not None
                        else creature.creature_type == CreatureType.PLAYER
                    ),
                )
                for creature, pos in self._creature_positions.items()
            ],
            objects=[
                ObjectMarker(
                    name=world_object.name,
                    x=pos.x,
                    y=pos.y,
                    has_item=world_object in self._object_items,
                )
                for world_object, pos in self._object_positions.items()
            ],
        )
