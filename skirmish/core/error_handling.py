"""
Centralized error handling for the skirmish engine.

Defines the exception taxonomy (configuration errors, invariant violations,
unsupported operations) and the error handler that records recoverable
failures with a severity.
"""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class GameException(Exception):
    """Base class of every error raised by the engine."""


class InvalidConfigurationError(GameException):
    """A world descriptor or a selected option is malformed. Fatal at load."""


class InvariantViolationError(GameException):
    """A structural invariant was broken. Signals a programming error."""


class UnsupportedOperationError(GameException):
    """The operation is not supported by this variant of the object."""


class ErrorSeverity(Enum):
    """Enumeration of error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class GameError:
    """Represents a handled error with severity, context and exception."""

    message: str
    severity: ErrorSeverity
    context: dict[str, Any]
    exception: Optional[Exception] = None


class ErrorHandler:
    """Records and logs recoverable errors."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("skirmish.errors")
        self.error_history: list[GameError] = []

    def handle(
        self,
        message: str,
        severity: ErrorSeverity,
        context: Optional[dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> GameError:
        """Handle an error based on its severity."""
        error = GameError(
            message=message,
            severity=severity,
            context=context or {},
            exception=exception,
        )
        self.error_history.append(error)

        # Prefix context keys to avoid clashes with LogRecord attributes.
        safe_context = {f"ctx_{key}": value for key, value in error.context.items()}

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(f"CRITICAL: {error.message}", extra=safe_context)
            if error.exception:
                self.logger.critical(
                    "".join(traceback.format_exception(error.exception))
                )
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error(f"ERROR: {error.message}", extra=safe_context)
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"WARNING: {error.message}", extra=safe_context)
        else:
            self.logger.info(f"INFO: {error.message}", extra=safe_context)
        return error

    def clear(self) -> None:
        """Forget every recorded error."""
        self.error_history.clear()


# Global error handler instance
ERROR_HANDLER = ErrorHandler()


def require_positive_int(
    value: Any, param_name: str, context: Optional[dict[str, Any]] = None
) -> int:
    """
    Validates that a value is a strictly positive integer.

    Args:
        value: The value to validate.
        param_name: Human-readable parameter name for error messages.
        context: Additional context for logging.

    Returns:
        int: The validated value.

    Raises:
        InvalidConfigurationError: If validation fails.

    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        ERROR_HANDLER.handle(
            f"{param_name} must be a positive integer, got: {value}",
            ErrorSeverity.HIGH,
            {**(context or {}), "param_name": param_name, "value": value},
        )
        raise InvalidConfigurationError(f"Invalid {param_name}: {value}")
    return value


def require_enum_type(
    value: Any,
    enum_class: type,
    param_name: str,
    context: Optional[dict[str, Any]] = None,
) -> Any:
    """
    Validates that a value is a member of the given enum.

    Args:
        value: The value to validate.
        enum_class: The expected enum class.
        param_name: Human-readable parameter name for error messages.
        context: Additional context for logging.

    Returns:
        The validated enum value.

    Raises:
        InvalidConfigurationError: If validation fails.

    """
    if not isinstance(value, enum_class):
        ERROR_HANDLER.handle(
            f"{param_name} must be {enum_class.__name__}, got: {type(value).__name__}",
            ErrorSeverity.HIGH,
            {
                **(context or {}),
                "param_name": param_name,
                "expected_type": enum_class.__name__,
                "value": value,
            },
        )
        raise InvalidConfigurationError(
            f"Invalid {param_name}: expected {enum_class.__name__}, "
            f"got {type(value).__name__}"
        )
    return value
