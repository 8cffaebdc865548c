"""
Configuration Management for PulseBoard

Settings are merged with the precedence:
environment → user.yaml → defaults.yaml → model defaults.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path("config")


class ValidationLevel(str, Enum):
    """Validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class TimingConfig(BaseModel):
    """Simulated latency of the async actions"""
    model_config = ConfigDict(extra='forbid')

    metrics_load_delay: float = Field(default=1.0, ge=0.0, le=60.0, description="Metrics load delay (seconds)")
    login_delay: float = Field(default=1.0, ge=0.0, le=60.0, description="Login delay (seconds)")


class StorageConfig(BaseModel):
    """Durable key-value storage for preferences"""
    model_config = ConfigDict(extra='forbid')

    backend: Literal["memory", "file", "duckdb"] = Field(default="file", description="Storage backend")
    path: str = Field(default="data/state", description="Directory (file) or database path (duckdb)")
    settings_key: str = Field(default="dashboard-settings", min_length=1, description="Preferences slot key")


class PreferencesConfig(BaseModel):
    """Preferences hydration"""
    model_config = ConfigDict(extra='forbid')

    hydration: ValidationLevel = Field(
        default=ValidationLevel.LENIENT,
        description="strict raises on a malformed stored record, lenient falls back to defaults",
    )


class DirectoryConfig(BaseModel):
    """User directory behaviour"""
    model_config = ConfigDict(extra='forbid')

    clear_current_user_on_failed_login: bool = Field(
        default=False,
        description="Clear the current user when login finds no matching email",
    )


class LoggingConfig(BaseModel):
    """Logging output"""
    model_config = ConfigDict(extra='forbid')

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_file: Optional[str] = Field(default=None, description="Rotating log file path")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    backup_count: int = Field(default=5, ge=0, le=100)


class SystemConfig(BaseModel):
    """Complete system configuration"""
    model_config = ConfigDict(extra='forbid')

    timing: TimingConfig = Field(default_factory=TimingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)
    directory: DirectoryConfig = Field(default_factory=DirectoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    schema_version: int = Field(default=1, description="Configuration schema version")


# Environment variable → (section, key)
ENV_OVERRIDES: Dict[str, tuple] = {
    'PULSEBOARD_METRICS_LOAD_DELAY': ('timing', 'metrics_load_delay'),
    'PULSEBOARD_LOGIN_DELAY': ('timing', 'login_delay'),
    'PULSEBOARD_STORAGE_BACKEND': ('storage', 'backend'),
    'PULSEBOARD_STORAGE_PATH': ('storage', 'path'),
    'PULSEBOARD_SETTINGS_KEY': ('storage', 'settings_key'),
    'PULSEBOARD_PREFERENCES_HYDRATION': ('preferences', 'hydration'),
    'PULSEBOARD_CLEAR_USER_ON_FAILED_LOGIN': ('directory', 'clear_current_user_on_failed_login'),
    'LOG_LEVEL': ('logging', 'level'),
    'PULSEBOARD_LOG_FILE': ('logging', 'log_file'),
}


class ConfigManager:
    """Loads and merges configuration from YAML files and the environment"""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir is not None else DEFAULT_CONFIG_DIR
        self._defaults: Optional[Dict[str, Any]] = None
        self._user_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load a YAML mapping, empty when missing or unreadable"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring {file_path}: top level is not a mapping")
            return {}
        return data

    def _load_defaults(self) -> Dict[str, Any]:
        if self._defaults is None:
            self._defaults = self._load_yaml_file(self.config_dir / "defaults.yaml")
        return self._defaults

    def _load_user_config(self) -> Dict[str, Any]:
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")
        return self._user_config

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Collect overrides from environment variables; pydantic coerces the strings"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key) in ENV_OVERRIDES.items():
            value = os.getenv(env_key)
            if value is None:
                continue
            if config_key == 'level':
                value = value.upper()
            overrides.setdefault(section, {})[config_key] = value
        return overrides

    def _merge_configs(self) -> Dict[str, Any]:
        merged = SystemConfig().model_dump(mode="json")
        self._deep_merge(merged, self._load_defaults())
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def save_user_config(self, config_updates: Dict[str, Any]) -> None:
        """Merge updates into user.yaml"""
        user_path = self.config_dir / "user.yaml"
        existing = self._load_yaml_file(user_path)
        self._deep_merge(existing, config_updates)

        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(user_path, 'w', encoding='utf-8') as f:
            yaml.dump(existing, f, default_flow_style=False, sort_keys=False, indent=2)
        self._user_config = None

    def reload_config(self) -> None:
        """Clear cached files so the next get_config re-reads them"""
        self._defaults = None
        self._user_config = None
