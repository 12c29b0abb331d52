"""Configuration loading from YAML/JSON files and the environment."""
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from capkit.config.schemas import AppConfig
from capkit.config.utils.env_expansion import expand_config_env_vars
from capkit.domain.base.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "CAPKIT_"
CONFIG_FILE_ENV = f"{ENV_PREFIX}CONFIG"

# Environment variable -> dotted configuration key
ENV_OVERRIDES = {
    f"{ENV_PREFIX}LOG_LEVEL": "logging.level",
    f"{ENV_PREFIX}LOG_DESTINATION": "logging.destination",
    f"{ENV_PREFIX}REGISTRY_POLICY": "registry.policy",
}


class ConfigurationLoader:
    """Loads raw configuration and turns it into a validated AppConfig."""

    @staticmethod
    def load_from_file(path: str) -> Dict[str, Any]:
        """
        Load a configuration file.

        Args:
            path: Path to a .yml, .yaml or .json file

        Returns:
            Raw configuration dictionary with environment references expanded

        Raises:
            ConfigurationError: If the file is missing, unreadable or malformed
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            text = file_path.read_text(encoding="utf-8")
            if file_path.suffix.lower() == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read configuration file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping")

        logger.debug(f"Loaded configuration from {path}")
        return expand_config_env_vars(data)

    @classmethod
    def load(cls, path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load raw configuration from a file (or CAPKIT_CONFIG) plus environment overrides.

        Without a file the defaults of the schemas apply.
        """
        path = path or os.environ.get(CONFIG_FILE_ENV)
        data = cls.load_from_file(path) if path else {}
        return cls.apply_environment_overrides(data)

    @staticmethod
    def apply_environment_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply CAPKIT_* environment overrides to raw configuration."""
        result = copy.deepcopy(data)
        for env_name, dotted_key in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value is None:
                continue

            section, key = dotted_key.split(".")
            current = result.setdefault(section, {})
            if not isinstance(current, dict):
                raise ConfigurationError(f"Configuration section '{section}' must be a mapping")
            current[key] = value
            logger.debug(f"Applied environment override {env_name} -> {dotted_key}")
        return result

    @staticmethod
    def create_app_config(data: Dict[str, Any]) -> AppConfig:
        """
        Validate raw configuration.

        Raises:
            ConfigurationError: If validation fails
        """
        try:
            return AppConfig.from_dict(data)
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
