"""
User interface module for the skirmish engine.

This module provides the input sources feeding the player's decisions and
the renderer drawing the grid.
"""
