"""
World module for the skirmish engine.

This module contains the spatial model: grid positions, world objects, and the
world index tracking where creatures and objects are.
"""
