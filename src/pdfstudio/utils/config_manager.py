"""
PDF Studio - Configuration Manager

This module provides centralized JSON-based configuration management
for editor defaults (overlay placement, size limits, output names).
"""

import copy
import json
import os
from typing import Any, Final

from pdfstudio.constants import (
    BYTES_PER_MB,
    DEFAULT_IMAGE_HEIGHT,
    DEFAULT_IMAGE_WIDTH,
    DEFAULT_MAX_FILE_MB,
    DEFAULT_SIGNATURE_HEIGHT,
    DEFAULT_SIGNATURE_WIDTH,
    DEFAULT_SIGNATURE_X,
    DEFAULT_SIGNATURE_Y,
    DEFAULT_TEXT_COLOR,
    DEFAULT_TEXT_SIZE,
)
from pdfstudio.utils.logger import logger

# Configuration directory - defined locally to avoid circular imports
CONFIG_DIR: Final[str] = os.path.expanduser("~/.config/pdfstudio")

# Configuration file path
CONFIG_FILE_PATH: Final[str] = os.path.join(CONFIG_DIR, "settings.json")

# Default configuration values
DEFAULT_CONFIG: Final[dict[str, Any]] = {
    "version": 1,
    "limits": {
        "max_file_mb": DEFAULT_MAX_FILE_MB,
    },
    "text": {
        "size": DEFAULT_TEXT_SIZE,
        "color": DEFAULT_TEXT_COLOR,
    },
    "image": {
        "width": DEFAULT_IMAGE_WIDTH,
        "height": DEFAULT_IMAGE_HEIGHT,
    },
    "signature": {
        "x": DEFAULT_SIGNATURE_X,
        "y": DEFAULT_SIGNATURE_Y,
        "width": DEFAULT_SIGNATURE_WIDTH,
        "height": DEFAULT_SIGNATURE_HEIGHT,
    },
    "output": {
        "edited_name": "edited.pdf",
        "merged_name": "merged.pdf",
    },
}


class ConfigManager:
    """Manages application configuration in JSON format.

    Settings are read once at construction. Missing keys fall back to
    DEFAULT_CONFIG, and older files are upgraded in place.
    """

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize the configuration manager.

        Args:
            config_path: Optional path to the configuration file.
                        Defaults to CONFIG_FILE_PATH.
        """
        self.config_path = config_path or CONFIG_FILE_PATH
        self._config: dict[str, Any] = {}

        os.makedirs(os.path.dirname(self.config_path), exist_ok=True)

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file or create default."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, encoding="utf-8") as f:
                    self._config = json.load(f)
                logger.info("Configuration loaded from JSON")

                self._upgrade_config()

            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Error loading config: {e}")
                self._config = self._get_default_config()
        else:
            self._config = self._get_default_config()
            self.save()

    def _get_default_config(self) -> dict[str, Any]:
        """Get a copy of the default configuration."""
        return copy.deepcopy(DEFAULT_CONFIG)

    def _upgrade_config(self) -> None:
        """Upgrade configuration to latest version if needed."""
        current_version = self._config.get("version", 0)

        if current_version < DEFAULT_CONFIG["version"]:
            self._merge_defaults(self._config, DEFAULT_CONFIG)
            self._config["version"] = DEFAULT_CONFIG["version"]
            logger.info(f"Configuration upgraded to version {DEFAULT_CONFIG['version']}")

    def _merge_defaults(self, config: dict, defaults: dict) -> None:
        """Merge default values into config for missing keys.

        Args:
            config: Current configuration dictionary.
            defaults: Default configuration dictionary.
        """
        for key, value in defaults.items():
            if key not in config:
                config[key] = copy.deepcopy(value)
            elif isinstance(value, dict) and isinstance(config.get(key), dict):
                self._merge_defaults(config[key], value)

    def save(self) -> bool:
        """Save configuration to file.

        Returns:
            True if save was successful, False otherwise.
        """
        try:
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
            logger.debug("Configuration saved to JSON")
            return True
        except OSError as e:
            logger.error(f"Error saving config: {e}")
            return False

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a configuration value by dot-separated path.

        Values absent from the file resolve against DEFAULT_CONFIG before
        falling back to ``default``.

        Args:
            key_path: Dot-separated path to the config value (e.g., "text.size")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        for source in (self._config, DEFAULT_CONFIG):
            value: Any = source
            for key in key_path.split("."):
                if isinstance(value, dict) and key in value:
                    value = value[key]
                else:
                    break
            else:
                return value
        return default

    def set(self, key_path: str, value: Any, save_immediately: bool = True) -> None:
        """Set a configuration value by dot-separated path.

        Args:
            key_path: Dot-separated path to the config value
            value: Value to set
            save_immediately: Whether to save to file immediately
        """
        keys = key_path.split(".")
        config = self._config

        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

        if save_immediately:
            self.save()

    @property
    def max_file_bytes(self) -> int:
        """Upload size limit in bytes."""
        return int(float(self.get("limits.max_file_mb", DEFAULT_MAX_FILE_MB)) * BYTES_PER_MB)


# Singleton instance for global access
_config_manager: ConfigManager | None = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance.

    Returns:
        The singleton ConfigManager instance
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
