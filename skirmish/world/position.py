"""Grid positions."""

import math
from dataclasses import dataclass

from core.constants import Direction


@dataclass(frozen=True)
class Position:
    """A cell of the grid; y grows downwards."""

    x: int
    y: int

    def moved(self, direction: Direction) -> "Position":
        """Returns the neighbouring position in the given direction."""
        dx, dy = direction.offset
        return Position(self.x + dx, self.y + dy)

    def distance_to(self, other: "Position") -> float:
        """Returns the Euclidean distance to another position."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
