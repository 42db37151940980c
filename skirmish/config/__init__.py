"""
Configuration module for the skirmish engine.

This module loads world descriptors and builds populated worlds from them.
"""
