"""
Items system module for the skirmish engine.

This module contains the equipment creatures can loot: the attack component
tree, attack and defense items, item decorators and the item factory.
"""
