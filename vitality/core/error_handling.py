"""
Centralized error handling for the vitality engine.

The engine has a narrow error taxonomy: invariant violations are
fatal programming errors, no-op conditions are reported through return
values, and lookup misses fall back to defaults. This module holds the
exception types for the first case and the validation helpers used when
building ledgers and records.
"""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorSeverity(Enum):
    """Enumeration of error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class VitalityError(Exception):
    """Base class for errors raised by the vitality engine."""


class InvariantViolationError(VitalityError):
    """Raised when current HP escapes the [0, total HP] range."""


@dataclass
class GameError:
    """Represents an error with severity, context, and optional exception."""

    message: str
    severity: ErrorSeverity
    context: dict[str, Any]
    exception: Optional[Exception] = None


class ErrorHandler:
    """Records errors and logs them according to their severity."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("vitality_errors")
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

        # Prefix context keys to avoid clashing with LogRecord attributes.
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


def raise_invariant_violation(
    message: str, context: Optional[dict[str, Any]] = None
) -> None:
    """
    Logs an invariant violation as critical and raises it.

    Args:
        message (str): Description of the broken invariant.
        context (Optional[dict[str, Any]]): Values involved in the violation.

    Raises:
        InvariantViolationError: Always.

    """
    exception = InvariantViolationError(message)
    ERROR_HANDLER.handle(message, ErrorSeverity.CRITICAL, context, exception)
    raise exception


# ==============================================================================
# VALIDATION HELPERS
# ==============================================================================


def require_non_empty_string(value: Any, param_name: str) -> str:
    """
    Validates that a value is a non-empty string.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages

    Returns:
        str: The validated string, stripped of surrounding whitespace.

    Raises:
        ValueError: If the value is not a non-empty string.

    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{param_name} must be a non-empty string, got {value!r}")
    return value.strip()


def ensure_positive_int(value: Any, param_name: str) -> int:
    """
    Validates that a value is a strictly positive integer.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages

    Returns:
        int: The validated integer.

    Raises:
        ValueError: If the value is not an integer or is not positive.

    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{param_name} must be an integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{param_name} must be positive, got {value}")
    return value


def ensure_int_in_range(value: Any, param_name: str, min_value: int, max_value: int) -> int:
    """
    Validates that a value is an integer within an inclusive range.

    Args:
        value: The value to validate
        param_name: Human-readable parameter name for error messages
        min_value: Lowest accepted value
        max_value: Highest accepted value

    Returns:
        int: The validated integer.

    Raises:
        ValueError: If the value is not an integer or falls outside the range.

    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{param_name} must be an integer, got {value!r}")
    if not min_value <= value <= max_value:
        raise ValueError(
            f"{param_name} must be between {min_value} and {max_value}, got {value}"
        )
    return value
