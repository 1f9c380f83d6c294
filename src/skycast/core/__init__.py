"""Core modules for SkyCast.

Configuration, logging and error handling shared by the time processors.
"""

from .config_manager import AppConfig, ConfigManager, ForecastConfig, LoggingConfig
from .error_handler import (
    SkycastError,
    ConfigurationError,
    SlotParseError,
    ErrorHandler,
    ErrorSeverity
)
from .logging_manager import LoggingManager

__all__ = [
    "AppConfig",
    "ConfigManager",
    "ForecastConfig",
    "LoggingConfig",
    "SkycastError",
    "ConfigurationError",
    "SlotParseError",
    "ErrorHandler",
    "ErrorSeverity",
    "LoggingManager"
]
