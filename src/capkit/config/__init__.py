"""Configuration package with clean public API."""

from .loader import ConfigurationLoader
from .manager import ConfigurationManager, get_config_manager, reset_config_manager
from .schemas import (
    AppConfig,
    LogDestination,
    LoggingConfig,
    LogLevel,
    RegistrationConfig,
    RegistryConfig,
)

__all__ = [
    "AppConfig",
    "ConfigurationLoader",
    "ConfigurationManager",
    "LogDestination",
    "LogLevel",
    "LoggingConfig",
    "RegistrationConfig",
    "RegistryConfig",
    "get_config_manager",
    "reset_config_manager",
]
