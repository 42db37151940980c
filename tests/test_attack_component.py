"""
Tests for the attack component tree.
"""

import pytest
from core.constants import DamageKind
from core.error_handling import InvariantViolationError, UnsupportedOperationError
from items.attack_component import AttackGroup
from items.item import AttackItem


@pytest.fixture
def sword():
    return AttackItem(name="Sword", damage={DamageKind.PHYSICAL: 15})


@pytest.fixture
def dagger():
    return AttackItem(name="Dagger", damage={DamageKind.PHYSICAL: 5, DamageKind.POISON: 3})


def test_leaf_total_is_sum_of_profile(dagger):
    assert dagger.total_damage() == 8
    assert dagger.children() == ()


def test_leaf_rejects_child_operations(sword, dagger):
    with pytest.raises(UnsupportedOperationError):
        sword.add_child(dagger)
    with pytest.raises(UnsupportedOperationError):
        sword.remove_child(dagger)


def test_group_total_is_sum_of_children(sword, dagger):
    group = AttackGroup("Dual Wield", [sword, dagger])
    assert group.total_damage() == 23
    assert group.children() == (sword, dagger)
    assert sword.parent is group


def test_group_total_is_order_independent(sword, dagger):
    first = AttackGroup("First", [sword, dagger])
    bow = AttackItem(name="Bow", damage={DamageKind.PHYSICAL: 10})
    axe = AttackItem(name="Axe", damage={DamageKind.PHYSICAL: 20})
    second = AttackGroup("Second", [axe, bow])
    assert first.total_damage() + second.total_damage() == 53
    assert AttackGroup("Swapped", [second, first]).total_damage() == 53


def test_nested_groups_sum_recursively(sword, dagger):
    inner = AttackGroup("Inner", [dagger])
    outer = AttackGroup("Outer", [sword, inner])
    assert outer.total_damage() == 23
    assert outer.is_ancestor_of(dagger)


def test_group_cannot_contain_itself():
    group = AttackGroup("Loop")
    with pytest.raises(InvariantViolationError):
        group.add_child(group)


def test_group_cannot_contain_an_ancestor(sword):
    inner = AttackGroup("Inner", [sword])
    outer = AttackGroup("Outer", [inner])
    with pytest.raises(InvariantViolationError):
        inner.add_child(outer)


def test_component_cannot_have_two_parents(sword):
    AttackGroup("First", [sword])
    with pytest.raises(InvariantViolationError):
        AttackGroup("Second", [sword])


def test_remove_child_releases_parent(sword, dagger):
    group = AttackGroup("Pair", [sword, dagger])
    group.remove_child(sword)
    assert group.children() == (dagger,)
    assert sword.parent is None
    # Removing a component that is not a child is a no-op.
    group.remove_child(sword)
    assert group.total_damage() == 8


def test_group_rejects_non_components():
    with pytest.raises(TypeError):
        AttackGroup("Bad").add_child("sword")
