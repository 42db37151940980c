"""
Grid renderer for the skirmish engine.

Draws a world snapshot as a bordered character grid: the player is "x",
other creatures "C", world objects "i", walkable cells "." and blocked cells
"#".
"""

from core.utils import cprint
from world.snapshot import WorldSnapshot

PLAYER_GLYPH = "x"
CREATURE_GLYPH = "C"
OBJECT_GLYPH = "i"
WALKABLE_GLYPH = "."
BLOCKED_GLYPH = "#"

# Rich styles of the glyphs, used when drawing on the console.
GLYPH_STYLES: dict[str, str] = {
    PLAYER_GLYPH: "bold blue",
    CREATURE_GLYPH: "bold red",
    OBJECT_GLYPH: "bold yellow",
    WALKABLE_GLYPH: "dim white",
    BLOCKED_GLYPH: "white",
}


class GridRenderer:
    """Render sink turning world snapshots into text."""

    def glyph_at(self, snapshot: WorldSnapshot, x: int, y: int) -> str:
        """Returns the glyph of a cell; creatures hide objects beneath them."""
        creature = snapshot.creature_at(x, y)
        if creature is not None:
            return PLAYER_GLYPH if creature.is_player else CREATURE_GLYPH
        if snapshot.object_at(x, y) is not None:
            return OBJECT_GLYPH
        return WALKABLE_GLYPH if snapshot.walkable[y][x] else BLOCKED_GLYPH

    def render_lines(self, snapshot: WorldSnapshot) -> list[str]:
        """
        Draws the snapshot as plain text.

        Args:
            snapshot (WorldSnapshot): The world to draw.

        Returns:
            list[str]: The rows of the drawing, borders included.

        """
        border = "-" * (snapshot.width * 2 + 1)
        lines = ["/" + border + "\\"]
        for y in range(snapshot.height):
            cells = "".join(
                self.glyph_at(snapshot, x, y) + " " for x in range(snapshot.width)
            )
            lines.append("| " + cells + "|")
        lines.append("\\" + border + "/")
        return lines

    def render(self, snapshot: WorldSnapshot) -> None:
        """Draws the snapshot on the console, with colored glyphs."""
        for line in self.render_lines(snapshot):
            cprint("".join(self._style(char) for char in line), highlight=False)

    @staticmethod
    def _style(char: str) -> str:
        style = GLYPH_STYLES.get(char)
        if style is None:
            return char
        return f"[{style}]{char}[/]"
