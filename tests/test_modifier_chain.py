"""
Tests for the damage modifier chain.
"""

import pytest
from combat.modifiers import DamageModifier, ModifierChain, ScalingModifier, StatusModifier
from core.constants import DamageKind
from core.error_handling import ERROR_HANDLER, InvariantViolationError, UnsupportedOperationError
from items.item import AttackItem, DefenseItem


class ExplodingModifier(DamageModifier):
    name = "Exploding"

    def apply(self, attacker, defender, damage):
        raise RuntimeError("boom")


class UndefinedModifier(DamageModifier):
    name = "Undefined"

    def apply(self, attacker, defender, damage):
        raise UnsupportedOperationError("undefined for these inputs")


class BrokenInvariantModifier(DamageModifier):
    name = "Broken"

    def apply(self, attacker, defender, damage):
        raise InvariantViolationError("modifier state is corrupt")


class SloppyModifier(DamageModifier):
    name = "Sloppy"

    def apply(self, attacker, defender, damage):
        return "lots"


@pytest.fixture
def chain():
    return ModifierChain(owner_name="Hero")


@pytest.fixture(autouse=True)
def clear_errors():
    ERROR_HANDLER.clear()
    yield
    ERROR_HANDLER.clear()


def test_empty_chain_returns_input(chain):
    assert chain.notify(None, None, 30) == 30
    assert len(chain) == 0


def test_modifiers_apply_in_insertion_order(chain):
    chain.attach(StatusModifier(name="Rage", amount=10))
    chain.attach(ScalingModifier(name="Half", percent=50))
    assert chain.notify(None, None, 30) == 20

    reversed_chain = ModifierChain()
    reversed_chain.attach(ScalingModifier(name="Half", percent=50))
    reversed_chain.attach(StatusModifier(name="Rage", amount=10))
    assert reversed_chain.notify(None, None, 30) == 25


def test_chain_is_deterministic(chain):
    chain.attach(StatusModifier(name="Rage", amount=7))
    chain.attach(ScalingModifier(name="Boost", percent=150))
    assert chain.notify(None, None, 11) == chain.notify(None, None, 11) == 27


def test_status_modifier_clamps_at_zero(chain):
    chain.attach(StatusModifier(name="Weakness", amount=-50))
    assert chain.notify(None, None, 30) == 0


def test_items_pass_damage_through(chain):
    chain.attach(AttackItem(name="Sword", damage={DamageKind.PHYSICAL: 15}))
    chain.attach(DefenseItem(name="Shield", defense={DamageKind.PHYSICAL: 5}))
    assert chain.notify(None, None, 30) == 30


def test_failing_modifier_is_skipped(chain):
    chain.attach(StatusModifier(name="Rage", amount=5))
    chain.attach(ExplodingModifier())
    chain.attach(SloppyModifier())
    chain.attach(StatusModifier(name="Focus", amount=1))
    assert chain.notify(None, None, 10) == 16
    assert len(ERROR_HANDLER.error_history) == 2


def test_engine_errors_do_not_abort_the_chain(chain):
    chain.attach(StatusModifier(name="Rage", amount=5))
    chain.attach(UndefinedModifier())
    chain.attach(BrokenInvariantModifier())
    chain.attach(StatusModifier(name="Focus", amount=1))
    assert chain.notify(None, None, 10) == 16
    assert len(ERROR_HANDLER.error_history) == 2
    assert isinstance(ERROR_HANDLER.error_history[0].exception, UnsupportedOperationError)


def test_detach_matches_identity(chain):
    first = StatusModifier(name="Rage", amount=5)
    twin = StatusModifier(name="Rage", amount=5)
    chain.attach(first)
    assert twin not in chain
    assert chain.detach(twin) is False
    assert chain.detach(first) is True
    assert chain.notify(None, None, 10) == 10


def test_attach_rejects_non_modifiers(chain):
    with pytest.raises(TypeError):
        chain.attach(lambda a, d, dmg: dmg)
