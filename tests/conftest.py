"""
Shared fixtures for the skirmish test-suite.
"""

import pytest
from core.audit import MemoryAuditSink
from core.constants import DamageKind, DifficultyTier
from creatures.behaviors import IdleBehavior, PlayerBehavior
from creatures.creature import make_enemy, make_player
from ui.input_source import ScriptedInputSource
from world.position import Position
from world.world import World


@pytest.fixture
def audit():
    return MemoryAuditSink()


@pytest.fixture
def world(audit):
    return World(3, 3, audit=audit)


@pytest.fixture
def script():
    return ScriptedInputSource()


@pytest.fixture
def player(world, script):
    hero = make_player(
        world,
        PlayerBehavior(script),
        DifficultyTier.HARD,
        base_damage={DamageKind.PHYSICAL: 10},
    )
    world.add_creature(hero, Position(1, 1))
    return hero


@pytest.fixture
def enemy(world):
    goblin = make_enemy(
        world,
        IdleBehavior(),
        DifficultyTier.HARD,
        name="Goblin",
        base_damage={DamageKind.PHYSICAL: 10},
    )
    world.add_creature(goblin, Position(1, 0))
    return goblin
