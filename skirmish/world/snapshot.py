"""
Read-only snapshot of the world handed to the render sink each turn.
"""

from pydantic import BaseModel, ConfigDict, Field


class CreatureMarker(BaseModel):
    """A creature as seen by the renderer."""

    model_config = ConfigDict(frozen=True)

    name: str
    x: int
    y: int
    hp: int
    max_hp: int
    is_player: bool = False


class ObjectMarker(BaseModel):
    """A world object as seen by the renderer."""

    model_config = ConfigDict(frozen=True)

    name: str
    x: int
    y: int
    has_item: bool = False


class WorldSnapshot(BaseModel):
    """Everything needed to draw the grid for one turn."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(description="Number of columns.", gt=0)
    height: int = Field(description="Number of rows.", gt=0)
    walkable: list[list[bool]] = Field(
        description="Walkability per cell, indexed as walkable[y][x].",
    )
    creatures: list[CreatureMarker] = Field(default_factory=list)
    objects: list[ObjectMarker] = Field(default_factory=list)

    @property
    def player(self) -> CreatureMarker | None:
        """Returns the marker of the acting player, if any."""
        return next((c for c in self.creatures if c.is_player), None)

    def creature_at(self, x: int, y: int) -> CreatureMarker | None:
        return next((c for c in self.creatures if (c.x, c.y) == (x, y)), None)

    def object_at(self, x: int, y: int) -> ObjectMarker | None:
        return next((o for o in self.objects if (o.x, o.y) == (x, y)), None)
