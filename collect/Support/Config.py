from __future__ import annotations

from typing import Any, Dict, Optional, List, Callable
import os
import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

LOG_LEVELS = ('debug', 'info', 'warning', 'error', 'critical')


class CollectionSettings(BaseModel):
    """Collection behaviour settings with validation."""

    model_config = ConfigDict(extra='forbid')

    # Conversion
    force_conversion: bool = Field(
        default=True,
        description="Wrap values that cannot be converted instead of raising in Collection.factory()"
    )
    coerce_json_strings: bool = Field(
        default=True,
        description="Parse JSON object/array strings when converting to an array"
    )

    # Keys
    strict_keys: bool = Field(
        default=True,
        description="Raise on non-scalar keys produced by flip() instead of skipping them"
    )

    # Logging
    log_level: str = Field(
        default="warning",
        description="Level of the package logger"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {', '.join(LOG_LEVELS)}")
        return level


class ConfigRepository:
    """Laravel-style configuration repository for collection settings."""

    ENV_PREFIX = 'COLLECT_'

    def __init__(self, env_file: Optional[str] = '.env') -> None:
        self._env_file = env_file
        self._settings = CollectionSettings()
        self._observers: Dict[str, List[Callable[[str, Any], None]]] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load settings from the .env file and the environment."""
        file_values = self._load_environment_config()

        values: Dict[str, Any] = {}
        for name in CollectionSettings.model_fields:
            env_key = f"{self.ENV_PREFIX}{name.upper()}"
            raw = os.getenv(env_key, file_values.get(env_key))
            if raw is not None:
                values[name] = self._convert_env_value(raw)

        self._settings = CollectionSettings(**values)

    def _load_environment_config(self) -> Dict[str, str]:
        """Read COLLECT_* variables from the .env file, leaving os.environ untouched."""
        values: Dict[str, str] = {}
        if not self._env_file:
            return values

        env_file = Path(self._env_file)
        if not env_file.exists():
            return values

        try:
            with open(env_file, 'r', encoding='utf-8') as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith('#') and '=' in line:
                        key, value = line.split('=', 1)
                        key = key.strip()
                        if key.startswith(self.ENV_PREFIX):
                            # Remove quotes if present
                            values[key] = value.strip().strip('"\'')
        except OSError as e:
            logging.getLogger(__name__).warning(f"Error loading .env file: {e}")

        return values

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate type."""
        # Boolean values
        if value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        # None/null values
        if value.lower() in ('null', 'none', ''):
            return None

        # Numeric values
        try:
            if '.' in value:
                return float(value)
            else:
                return int(value)
        except ValueError:
            pass

        # JSON values
        if value.startswith(('{', '[')):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        # String value
        return value

    @property
    def settings(self) -> CollectionSettings:
        """Get the validated settings model."""
        return self._settings

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        return getattr(self._settings, key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value, validating the whole settings model."""
        old_value = self.get(key)

        data = self._settings.model_dump()
        data[key] = value
        self._settings = CollectionSettings.model_validate(data)

        self._notify_observers(key, self.get(key), old_value)

    def has(self, key: str) -> bool:
        """Check if a setting exists."""
        return key in CollectionSettings.model_fields

    def all(self) -> Dict[str, Any]:
        """Get all settings."""
        return self._settings.model_dump()

    def env(self, key: str, default: Any = None) -> Any:
        """Get environment variable with optional default."""
        return os.getenv(key, default)

    def _notify_observers(self, key: str, new_value: Any, old_value: Any = None) -> None:
        """Notify observers of configuration changes."""
        if new_value == old_value:
            return

        for observer in self._observers.get(key, []):
            observer(key, new_value)

    def observe(self, key: str, callback: Callable[[str, Any], None]) -> None:
        """Register an observer for configuration changes."""
        if key not in self._observers:
            self._observers[key] = []
        self._observers[key].append(callback)

    def reload(self) -> None:
        """Reload all settings from the environment."""
        previous = self._settings.model_dump()
        self._load_config()

        for key, old_value in previous.items():
            self._notify_observers(key, self.get(key), old_value)


# Global config instance
config = ConfigRepository()


def env(key: str, default: Any = None) -> Any:
    """Get environment variable with type conversion."""
    value = os.getenv(key, default)
    if value is None:
        return default

    # Convert to appropriate type if it's a string
    if isinstance(value, str):
        return config._convert_env_value(value)

    return value
