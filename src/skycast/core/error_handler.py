"""Global Error Handling for SkyCast

Exception hierarchy and severity-based error logging for skill handlers.
"""

import logging
import sys
from enum import Enum
from typing import Callable, Dict, Optional, Type


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SkycastError(Exception):
    """Base exception class for SkyCast."""

    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM):
        self.message = message
        self.severity = severity
        super().__init__(self.message)


class ConfigurationError(SkycastError):
    """Error raised when configuration is invalid."""
    pass


class SlotParseError(SkycastError):
    """Error raised when an NLU time slot payload cannot be interpreted."""

    def __init__(self, message: str, payload: Optional[dict] = None):
        super().__init__(message, ErrorSeverity.LOW)
        self.payload = payload


class ErrorHandler:
    """Error handler used by skill intent handlers."""

    def __init__(self):
        """Initialize error handler."""
        self.logger = logging.getLogger(__name__)
        self.error_callbacks: Dict[Type[Exception], Callable] = {}

    def register_error_callback(self, exception_type: Type[Exception],
                              callback: Callable[[Exception], None]):
        """Register a callback for specific exception types.

        Args:
            exception_type: The exception type to handle
            callback: Function to call when this exception occurs
        """
        self.error_callbacks[exception_type] = callback

    def handle_error(self, error: Exception, context: Optional[str] = None) -> bool:
        """Handle an error with logging at a severity-appropriate level.

        Args:
            error: The exception that occurred
            context: Additional context about where the error occurred

        Returns:
            True if error was handled successfully, False otherwise
        """
        try:
            severity = self.get_error_severity(error)
            error_message = self._format_error_message(error, context)

            self._log_error(error_message, severity)

            error_type = type(error)
            if error_type in self.error_callbacks:
                self.error_callbacks[error_type](error)

            return True

        except Exception as handler_error:
            # If error handler itself fails, log to stderr
            print(f"Error handler failed: {handler_error}", file=sys.stderr)
            return False

    def get_error_severity(self, error: Exception) -> ErrorSeverity:
        """Determine error severity based on exception type.

        Args:
            error: The exception to analyze

        Returns:
            Appropriate severity level
        """
        if isinstance(error, SkycastError):
            return error.severity

        severity_map = {
            ValueError: ErrorSeverity.MEDIUM,
            TypeError: ErrorSeverity.HIGH,
            FileNotFoundError: ErrorSeverity.MEDIUM,
            PermissionError: ErrorSeverity.HIGH,
            MemoryError: ErrorSeverity.CRITICAL,
            KeyboardInterrupt: ErrorSeverity.LOW,
        }

        return severity_map.get(type(error), ErrorSeverity.MEDIUM)

    def _format_error_message(self, error: Exception, context: Optional[str] = None) -> str:
        message = str(error)
        if context:
            message = f"{context}: {message}"

        return message

    def _log_error(self, message: str, severity: ErrorSeverity):
        log_methods = {
            ErrorSeverity.LOW: self.logger.info,
            ErrorSeverity.MEDIUM: self.logger.warning,
            ErrorSeverity.HIGH: self.logger.error,
            ErrorSeverity.CRITICAL: self.logger.critical,
        }

        log_method = log_methods[severity]
        log_method(message, exc_info=True)
