"""Configuration schemas."""

from .app_schema import AppConfig
from .logging_schema import LogDestination, LogFileConfig, LoggingConfig, LogLevel
from .registry_schema import RegistrationConfig, RegistryConfig

__all__ = [
    "AppConfig",
    "LogDestination",
    "LogFileConfig",
    "LogLevel",
    "LoggingConfig",
    "RegistrationConfig",
    "RegistryConfig",
]
