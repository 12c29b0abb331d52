"""Configuration management for the application."""
from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from capkit.config.loader import ConfigurationLoader
from capkit.config.schemas import AppConfig

logger = logging.getLogger(__name__)


class ConfigurationManager:
    """
    Single source of truth for configuration.

    Configuration is loaded lazily on first access and cached until
    ``reload`` is called.
    """

    def __init__(self, config_file: Optional[str] = None):
        """Initialize configuration manager with lazy loading."""
        self._config_file = config_file
        self._lock = threading.RLock()
        self._app_config: Optional[AppConfig] = None

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    raw = ConfigurationLoader.load(self._config_file)
                    self._app_config = ConfigurationLoader.create_app_config(raw)
                    logger.info("Configuration loaded successfully")
        return self._app_config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key (dot notation for nested keys)
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value: Any = self.app_config.model_dump(mode="json")
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default
        return value

    def reload(self) -> None:
        """Reload configuration from sources on next access."""
        with self._lock:
            self._app_config = None


_config_manager: Optional[ConfigurationManager] = None
_manager_lock = threading.Lock()


def get_config_manager(config_file: Optional[str] = None) -> ConfigurationManager:
    """Get the global configuration manager, creating it on first use."""
    global _config_manager
    with _manager_lock:
        if _config_manager is None or (config_file and config_file != _config_manager._config_file):
            _config_manager = ConfigurationManager(config_file)
        return _config_manager


def reset_config_manager() -> None:
    """
    Reset the global configuration manager.

    This function is primarily for testing purposes.
    """
    global _config_manager
    with _manager_lock:
        _config_manager = None
