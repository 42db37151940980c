"""
Tests for items, item decorators and the item factory.
"""

import pytest
from core.constants import DamageKind, ItemCategory
from core.error_handling import InvalidConfigurationError
from items.item import (
    AttackItem,
    DamageDecorator,
    DefenseDecorator,
    DefenseItem,
)
from items.item_factory import ItemFactory


@pytest.fixture
def factory():
    return ItemFactory()


def test_attack_item_profiles():
    bow = AttackItem(name="Bow", range=5, damage={DamageKind.PHYSICAL: 10})
    assert bow.category == ItemCategory.ATTACK
    assert bow.damage_values() == {DamageKind.PHYSICAL: 10}
    assert bow.defense_values() == {}
    bow.add_damage(DamageKind.FIRE, 3)
    assert bow.total_damage() == 13


def test_defense_item_profiles():
    shield = DefenseItem(name="Shield", defense={DamageKind.PHYSICAL: 5})
    assert shield.category == ItemCategory.DEFENSE
    assert shield.damage_values() == {}
    shield.add_defense(DamageKind.ICE, 2)
    assert shield.defense_values() == {DamageKind.PHYSICAL: 5, DamageKind.ICE: 2}


def test_profiles_are_copies():
    sword = AttackItem(name="Sword", damage={DamageKind.PHYSICAL: 15})
    sword.damage_values()[DamageKind.PHYSICAL] = 99
    assert sword.total_damage() == 15


def test_items_need_a_name():
    with pytest.raises(ValueError):
        AttackItem(name="")


def test_negative_magnitudes_are_rejected():
    with pytest.raises(ValueError):
        DefenseItem(name="Cursed Shield", defense={DamageKind.PHYSICAL: -5})
    sword = AttackItem(name="Sword")
    with pytest.raises(ValueError):
        sword.add_damage(DamageKind.PHYSICAL, -1)


def test_damage_decorator_adds_to_damage_only():
    sword = AttackItem(name="Sword", damage={DamageKind.PHYSICAL: 15})
    flaming = DamageDecorator(item=sword, kind=DamageKind.FIRE, value=5)
    assert flaming.name == "Sword"
    assert flaming.category == ItemCategory.ATTACK
    assert flaming.damage_values() == {DamageKind.PHYSICAL: 15, DamageKind.FIRE: 5}
    assert flaming.defense_values() == {}
    assert flaming.total_damage() == 20
    # The wrapped item is left untouched.
    assert sword.total_damage() == 15


def test_decorators_stack():
    shield = DefenseItem(name="Shield", defense={DamageKind.PHYSICAL: 5})
    warded = DefenseDecorator(item=shield, kind=DamageKind.PHYSICAL, value=3)
    frosted = DefenseDecorator(
        item=warded, kind=DamageKind.ICE, value=4, name="Frost Ward"
    )
    assert frosted.name == "Frost Ward"
    assert frosted.category == ItemCategory.DEFENSE
    assert frosted.defense_values() == {DamageKind.PHYSICAL: 8, DamageKind.ICE: 4}
    assert frosted.base_item is shield


def test_decorators_reject_the_other_category():
    sword = AttackItem(name="Sword", damage={DamageKind.PHYSICAL: 15})
    shield = DefenseItem(name="Shield", defense={DamageKind.PHYSICAL: 5})
    with pytest.raises(ValueError):
        DamageDecorator(item=shield, kind=DamageKind.FIRE, value=5)
    with pytest.raises(ValueError):
        DefenseDecorator(item=sword, kind=DamageKind.ICE, value=4)
    flaming = DamageDecorator(item=sword, kind=DamageKind.FIRE, value=5)
    with pytest.raises(ValueError):
        DefenseDecorator(item=flaming, kind=DamageKind.ICE, value=4)


def test_factory_presets(factory):
    assert factory.presets == ["Armor", "Axe", "Bow", "Shield", "Sword"]
    axe = factory.create_item("Axe")
    assert axe.total_damage() == 20
    armor = factory.create_item("Armor")
    assert armor.defense_values() == {DamageKind.PHYSICAL: 10}


def test_factory_builds_fresh_items(factory):
    assert factory.create_item("Sword") is not factory.create_item("Sword")


def test_factory_unknown_preset(factory):
    with pytest.raises(InvalidConfigurationError):
        factory.create_item("Excalibur")


def test_factory_build(factory):
    wand = factory.build("AttackItem", "Wand", damage={DamageKind.FIRE: 8})
    assert isinstance(wand, AttackItem)
    assert wand.total_damage() == 8
    with pytest.raises(InvalidConfigurationError):
        factory.build("Potion", "Elixir")
    with pytest.raises(InvalidConfigurationError):
        factory.build("DefenseItem", "")
