"""
World object module for the skirmish engine.

World objects are static entities occupying a cell (chests, crates, corpses).
They never own an item directly: the World keeps the object-to-item
association so an item can be detached without destroying the object.
"""

from dataclasses import dataclass


@dataclass(eq=False)
class WorldObject:
    """A static, possibly lootable and removable, entity of the world."""

    name: str
    lootable: bool = True
    removable: bool = True
    walkable: bool = True
    blocks_vision: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("WorldObject name must not be empty.")
