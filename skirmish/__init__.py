"""
Grid skirmish engine.

This package contains the modules of a turn-based tactical simulation:
creatures on a bounded grid world resolving combat through a layered damage
pipeline, plus configuration loading and a terminal front end.
"""
