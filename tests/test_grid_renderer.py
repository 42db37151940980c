"""
Tests for the grid renderer.
"""

import pytest
from core.constants import DamageKind
from items.item import AttackItem
from ui.grid_renderer import GridRenderer
from world.position import Position
from world.world_object import WorldObject


@pytest.fixture
def renderer():
    return GridRenderer()


def test_render_lines(world, player, enemy, renderer):
    world.add_world_object_with_item(
        WorldObject("Chest"),
        AttackItem(name="Sword", damage={DamageKind.PHYSICAL: 15}),
        Position(0, 2),
    )
    world.set_walkable(Position(2, 2), False)
    assert renderer.render_lines(world.snapshot(player)) == [
        "/-------\\",
        "| . C . |",
        "| . x . |",
        "| i . # |",
        "\\-------/",
    ]


def test_creature_hides_object(world, player, renderer):
    world.add_world_object(WorldObject("Crate"), Position(1, 1))
    snapshot = world.snapshot(player)
    assert renderer.glyph_at(snapshot, 1, 1) == "x"


def test_render_prints(world, player, renderer):
    renderer.render(world.snapshot(player))
