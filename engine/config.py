"""
Configuration manager for Filed Recipes.

Handles loading and managing application configuration from YAML files.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Any, List, Optional

import yaml
from utils.paths import CONFIG_PATH, LOG_DIR, RECIPES_PATH


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or parsed."""
    pass


class ConfigManager:
    """Manages application configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration manager."""
        self.logger = logging.getLogger(__name__)

        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = CONFIG_PATH

        self._config = None

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            self.logger.warning(f"Config file not found at {self.config_path}, using defaults")
            self._config = self.get_default_config()
            return self._config

        try:
            with self.config_path.open('r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except OSError as e:
            self.logger.error(f"Failed to read configuration: {e}")
            raise ConfigError(f"Cannot read {self.config_path}: {e}") from e
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to parse configuration: {e}")
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigError(f"Configuration in {self.config_path} must be a mapping")

        # Merge with defaults to ensure all required keys exist
        self._config = self._merge_configs(self.get_default_config(), config)
        self.logger.info(f"Configuration loaded from {self.config_path}")

        return self._config

    def get_config(self) -> Dict[str, Any]:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            return self.load_config()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports dot notation)."""
        value = self.get_config()

        try:
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any):
        """Set configuration value by key (supports dot notation)."""
        current = self.get_config()

        keys = key.split('.')
        for k in keys[:-1]:
            if k not in current:
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    def save_config(self, config: Optional[Dict[str, Any]] = None, config_path: Optional[str] = None):
        """Save configuration to YAML file."""
        if config is not None:
            self._config = config

        if not self._config:
            self.logger.warning("No configuration to save")
            return

        save_path = Path(config_path) if config_path else self.config_path

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = save_path.with_suffix(save_path.suffix + ".tmp")
            with open(tmp_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self._config, f, default_flow_style=False, indent=2, allow_unicode=True)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, save_path)

            self.logger.info(f"Configuration saved to {save_path}")

        except OSError as e:
            self.logger.error(f"Failed to save configuration: {e}")
            raise

    def get_default_config(self) -> Dict[str, Any]:
        """Return default configuration values."""
        return {
            'recipes': {
                'path': str(RECIPES_PATH),
                'encoding': "utf-8",
            },
            'app': {
                'name': "Filed Recipes",
                'version': "1.0.0",
            },
            'logging': {
                'level': "INFO",
                'file': str(LOG_DIR / "app.log"),
                'max_size_mb': 2,
                'backup_count': 5,
            },
            'ui': {
                'window_width': 900,
                'window_height': 600,
                'confirm_delete': True,
            },
        }

    def _merge_configs(self, default: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
        """Merge user configuration with defaults."""
        result = default.copy()

        for key, value in user.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def get_recipes_path(self) -> str:
        """Get the path of the recipe file."""
        return self.get('recipes.path', str(RECIPES_PATH))

    def get_recipes_encoding(self) -> str:
        return self.get('recipes.encoding', "utf-8")

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.get('logging', {})

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []
        config = self.get_config()

        for section in ('recipes', 'logging'):
            if section not in config:
                errors.append(f"Missing required section: {section}")

        if not str(self.get('recipes.path') or '').strip():
            errors.append("Recipe file path not configured")

        level = str(self.get('logging.level', 'INFO')).upper()
        if not isinstance(logging.getLevelName(level), int):
            errors.append(f"Unknown logging level: {level}")

        for key in ('ui.window_width', 'ui.window_height'):
            value = self.get(key)
            if not isinstance(value, int) or value <= 0:
                errors.append(f"{key} must be a positive integer")

        return errors
