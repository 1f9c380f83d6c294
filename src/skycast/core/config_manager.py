"""Configuration Management for SkyCast

Handles loading, validation, and management of application configurations.
Supports hierarchical YAML configuration with environment variable overrides.
"""

import os
import re
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union, List
import logging

import yaml
from dateutil.tz import gettz
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .error_handler import ConfigurationError

SIZE_UNITS = {"KB": 1024, "MB": 1024 ** 2, "GB": 1024 ** 3}


class ForecastConfig(BaseModel):
    """Configuration for the supported forecast window."""
    days: int = Field(default=5, ge=1, le=16)
    timezone: Optional[str] = None

    @field_validator('timezone')
    @classmethod
    def validate_timezone(cls, v):
        """Validate IANA timezone name"""
        if v is not None and gettz(v) is None:
            raise ValueError(f"Unknown timezone: {v}")
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    file_path: Optional[str] = None
    max_file_size: str = Field(default="10MB")
    backup_count: int = Field(default=5, ge=1, le=20)
    log_to_console: bool = Field(default=True)

    @field_validator('max_file_size')
    @classmethod
    def validate_file_size(cls, v):
        """Validate file size format"""
        if not re.match(r'^\d+[KMG]B$', v.upper()):
            raise ValueError("File size must be in format: 10KB, 10MB, or 1GB")
        return v.upper()

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size[:-2]) * SIZE_UNITS[self.max_file_size[-2:]]


class AppConfig(BaseModel):
    """Main application configuration."""
    model_config = ConfigDict(validate_assignment=True)

    app_name: str = Field(default="SkyCast")
    environment: str = Field(default="development", pattern="^(development|staging|production|testing)$")
    debug_mode: bool = Field(default=False)

    forecast: ForecastConfig = Field(default_factory=ForecastConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Manages application configuration loading and validation."""

    ENV_PREFIX = "SKYCAST_"

    def __init__(self, config_path: Optional[Path] = None, environment: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to the configuration directory
            environment: Environment name (development, staging, production, testing)
        """
        self.config_base_path = Path(config_path) if config_path else self._get_default_config_path()
        self.environment = environment or os.getenv('SKYCAST_ENV', 'development')
        self._config: Optional[AppConfig] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

        # Configuration file paths
        self.config_files = self._get_config_files()

    def _get_default_config_path(self) -> Path:
        """Get the default configuration directory."""
        # Looking for config in order of precedence
        config_locations = [
            Path("config"),
            Path.home() / ".skycast",
            Path("/etc/skycast"),
        ]

        for location in config_locations:
            if location.exists() and location.is_dir():
                return location

        return Path("config")

    def _get_config_files(self) -> Dict[str, Path]:
        """Get configuration file paths for hierarchical loading."""
        base_dir = self.config_base_path

        return {
            'default': base_dir / 'default_config.yaml',
            'environment': base_dir / f'{self.environment}.yaml',
            'local': base_dir / 'local.yaml'  # For development overrides
        }

    def load_config(self) -> AppConfig:
        """Load and validate configuration with hierarchical overrides.

        Returns:
            Validated application configuration

        Raises:
            ConfigurationError: If a file cannot be parsed or validation fails
        """
        with self._lock:
            if self._config:
                return self._config

            config_data: Dict[str, Any] = {}

            for config_type, config_file in self.config_files.items():
                if config_file.exists():
                    self.logger.info(f"Loading {config_type} config from {config_file}")
                    self._deep_merge(config_data, self._load_yaml_file(config_file))

            env_overrides = self._get_env_overrides()
            if env_overrides:
                self.logger.info(f"Applying environment overrides: {list(env_overrides.keys())}")
                self._deep_merge(config_data, env_overrides)

            self._config = self._validate(config_data)
            return self._config

    def reload_config(self) -> AppConfig:
        """Discard the cached configuration and load it again."""
        with self._lock:
            self._config = None
        config = self.load_config()
        self.logger.info("Configuration reloaded")
        return config

    def update_config(self, updates: Dict[str, Any]) -> AppConfig:
        """Apply updates on top of the current configuration.

        Args:
            updates: Nested dictionary of values to change

        Returns:
            The new validated configuration
        """
        current = self.load_config().model_dump()
        self._deep_merge(current, updates)
        new_config = self._validate(current)
        with self._lock:
            self._config = new_config
        return new_config

    def _validate(self, config_data: Dict[str, Any]) -> AppConfig:
        try:
            return AppConfig(**config_data)
        except ValidationError as e:
            self.logger.error(f"Configuration validation failed: {e}")
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file.

        Returns:
            Configuration dictionary
        """
        try:
            with open(file_path, 'r') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to parse YAML file {file_path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Get configuration overrides from environment variables.

        Environment variables follow pattern: SKYCAST_<SECTION>_<KEY>
        Example: SKYCAST_FORECAST_DAYS -> forecast.days
        """
        overrides: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX) or key == 'SKYCAST_ENV':
                continue

            name = key[len(self.ENV_PREFIX):].lower()
            if name in AppConfig.model_fields:
                overrides[name] = self._convert_env_value(value)
                continue

            section, _, field_name = name.partition('_')
            if section in AppConfig.model_fields and field_name:
                overrides.setdefault(section, {})[field_name] = self._convert_env_value(value)

        return overrides

    def _convert_env_value(self, value: str) -> Union[str, int, float, bool, List[str]]:
        """Convert environment variable string to appropriate type."""
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        # List conversion (comma-separated)
        if ',' in value:
            return [v.strip() for v in value.split(',')]

        return value

    def _deep_merge(self, base_dict: Dict[str, Any], update_dict: Dict[str, Any]):
        for key, value in update_dict.items():
            if isinstance(value, dict) and isinstance(base_dict.get(key), dict):
                self._deep_merge(base_dict[key], value)
            else:
                base_dict[key] = value
