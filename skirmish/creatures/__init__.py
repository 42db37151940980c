"""
Creatures module for the skirmish engine.

This module contains the actors of the world: the Creature class with its
turn state machine, and the behaviors deciding what each variant does.
"""
