"""
Core system module for the skirmish engine.

This module contains the fundamental components shared by every other part of
the engine: enumerations, the exception taxonomy, logging, the audit sink and
console helpers.
"""

from .audit import (
    AuditEvent,
    AuditSink,
    LoggingAuditSink,
    MemoryAuditSink,
)
from .constants import (
    ActionType,
    AuditAction,
    CreatureType,
    DamageKind,
    DifficultyTier,
    Direction,
    ItemCategory,
    is_opponent,
)
from .error_handling import (
    ERROR_HANDLER,
    ErrorSeverity,
    GameException,
    InvalidConfigurationError,
    InvariantViolationError,
    UnsupportedOperationError,
)
from .utils import (
    ccapture,
    cprint,
    crule,
    make_bar,
)

__all__ = [
    # Import from audit.py
    "AuditEvent",
    "AuditSink",
    "LoggingAuditSink",
    "MemoryAuditSink",
    # Import from constants.py
    "ActionType",
    "AuditAction",
    "CreatureType",
    "DamageKind",
    "DifficultyTier",
    "Direction",
    "ItemCategory",
    "is_opponent",
    # Import from error_handling.py
    "ERROR_HANDLER",
    "ErrorSeverity",
    "GameException",
    "InvalidConfigurationError",
    "InvariantViolationError",
    "UnsupportedOperationError",
    # Import from utils.py
    "ccapture",
    "cprint",
    "crule",
    "make_bar",
]
