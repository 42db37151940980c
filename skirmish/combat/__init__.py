"""
Combat system module for the skirmish engine.

This module handles combat mechanics: damage profiles and strategies, the
damage modifier chain, and turn-based resolution.
"""
