"""
Configuration Management for asyncctl

Settings are resolved with a 3-tier precedence hierarchy:
environment → project file (asyncctl.yaml) → built-in defaults.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILENAME = "asyncctl.yaml"


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class ControllerSettings(BaseModel):
    """Defaults applied to controllers built from configuration"""
    model_config = ConfigDict(extra='forbid')

    persistent: bool = Field(default=False, description="Keep value/reason across resets")
    default_value: Any = Field(default=None, description="Placeholder value in transient mode")
    default_reason: Any = Field(default=None, description="Placeholder reason in transient mode")


class LoggingSettings(BaseModel):
    """Logging Configuration"""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="WARNING", description="Root log level")
    log_file: Optional[str] = Field(default=None, description="Rotating log file path")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024, description="Rotate after this many bytes")
    backup_count: int = Field(default=5, ge=0, le=50, description="Rotated files to keep")


class EventSettings(BaseModel):
    """Event Bus Configuration"""
    model_config = ConfigDict(extra='forbid')

    state_topic: str = Field(default="controller.state", min_length=1, description="Topic for snapshots")


class AsyncCtlConfig(BaseModel):
    """Complete configuration"""
    model_config = ConfigDict(extra='forbid')

    controller: ControllerSettings = Field(default_factory=ControllerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    events: EventSettings = Field(default_factory=EventSettings)

    schema_version: int = Field(default=1, description="Configuration schema version")


# env key -> (section, field, converter)
_ENV_MAP = {
    'ASYNCCTL_PERSISTENT': ('controller', 'persistent', 'bool'),
    'ASYNCCTL_LOG_LEVEL': ('logging', 'level', 'str'),
    'ASYNCCTL_LOG_FILE': ('logging', 'log_file', 'str'),
    'ASYNCCTL_STATE_TOPIC': ('events', 'state_topic', 'str'),
}


class ConfigManager:
    """Configuration manager with env → project → defaults precedence"""

    def __init__(self, project_root: Optional[Path] = None):
        self.project_root = project_root or Path.cwd()
        self._project_config: Optional[Dict[str, Any]] = None

        env_path = self.project_root / ".env"
        if env_path.exists():
            load_dotenv(dotenv_path=env_path, override=False)

    @property
    def project_config_path(self) -> Path:
        return self.project_root / PROJECT_CONFIG_FILENAME

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring {file_path}: top level must be a mapping")
            return {}
        return data

    def _save_yaml_file(self, file_path: Path, data: Dict[str, Any]) -> bool:
        """Save configuration to YAML file"""
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
            return True
        except OSError as e:
            logger.error(f"Failed to save {file_path}: {e}")
            return False

    def _load_project_config(self) -> Dict[str, Any]:
        """Load project-specific configuration"""
        if self._project_config is None:
            self._project_config = self._load_yaml_file(self.project_config_path)
        return self._project_config

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key, kind) in _ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue
            if kind == 'bool':
                converted: Any = value.strip().lower() in ('true', '1', 'yes', 'on')
            else:
                converted = value
            overrides.setdefault(section, {})[config_key] = converted
        return overrides

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → project → defaults"""
        merged = AsyncCtlConfig().model_dump()
        self._deep_merge(merged, self._load_project_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> AsyncCtlConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return AsyncCtlConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return AsyncCtlConfig()

    def save_project_config(self, config_updates: Dict[str, Any]) -> bool:
        """Merge ``config_updates`` into the project file"""
        existing_config = self._load_yaml_file(self.project_config_path)
        self._deep_merge(existing_config, config_updates)

        success = self._save_yaml_file(self.project_config_path, existing_config)
        if success:
            self._project_config = None
        return success

    def reload_config(self) -> None:
        """Clear cached configuration so the next read hits the file again"""
        self._project_config = None


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(project_root: Optional[Path] = None) -> ConfigManager:
    """Get global configuration manager instance"""
    global _config_manager
    if _config_manager is None or project_root is not None:
        _config_manager = ConfigManager(project_root)
    return _config_manager


def get_config(validation_level: ValidationLevel = ValidationLevel.STRICT) -> AsyncCtlConfig:
    """Get current configuration"""
    return get_config_manager().get_config(validation_level)
