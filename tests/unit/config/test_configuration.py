"""Tests for configuration schemas, loading and management."""
import json
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from capkit.config import (
    AppConfig,
    ConfigurationLoader,
    ConfigurationManager,
    LogDestination,
    LogLevel,
    RegistrationConfig,
    RegistryConfig,
    get_config_manager,
)
from capkit.domain.base.exceptions import ConfigurationError
from capkit.domain.capability import Lifetime, RegistrationPolicy


class TestSchemas:
    """Test configuration schema defaults and validation."""

    def test_defaults(self):
        config = AppConfig()

        assert config.version == "1.0"
        assert config.registry.policy == RegistrationPolicy.LAST_WINS
        assert config.registry.include_catalog is True
        assert config.registry.seal_after_load is True
        assert config.registry.registrations == []
        assert config.logging.level == LogLevel.INFO
        assert config.logging.destination == LogDestination.STDOUT

    def test_numeric_version(self):
        """Test that YAML-style numeric versions are accepted."""
        assert AppConfig(version=1.0).version == "1.0"

    def test_unsupported_version(self):
        with pytest.raises(PydanticValidationError, match="Unsupported configuration version"):
            AppConfig(version="2.0")

    @pytest.mark.parametrize("value", ["STRICT", "strict", "Strict"])
    def test_policy_normalized(self, value):
        assert RegistryConfig(policy=value).policy == RegistrationPolicy.STRICT

    def test_policy_with_dash(self):
        assert RegistryConfig(policy="last-wins").policy == RegistrationPolicy.LAST_WINS

    def test_log_level_normalized(self):
        assert AppConfig(logging={"level": "debug"}).logging.level == LogLevel.DEBUG

    def test_registration_requires_import_path(self):
        with pytest.raises(PydanticValidationError, match="module:attribute"):
            RegistrationConfig(capability="Door", implementation="IronDoor")

    def test_registration_fields(self):
        entry = RegistrationConfig(
            capability="capkit.catalog.zoo:Door",
            implementation="capkit.catalog.zoo:IronDoor",
            lifetime="singleton",
            config={"bars": 4},
        )
        assert entry.lifetime == Lifetime.SINGLETON
        assert entry.enabled is True
        assert entry.name is None

    def test_log_rotation_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            AppConfig(logging={"file": {"backup_count": 0}})


class TestConfigurationLoader:
    """Test loading configuration files and environment overrides."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "capkit.yml"
        path.write_text(
            "version: 1.0\n"
            "registry:\n"
            "  policy: strict\n"
            "  include_catalog: false\n"
            "logging:\n"
            "  level: warning\n"
        )

        config = ConfigurationLoader.create_app_config(ConfigurationLoader.load(str(path)))

        assert config.version == "1.0"
        assert config.registry.policy == RegistrationPolicy.STRICT
        assert config.registry.include_catalog is False
        assert config.logging.level == LogLevel.WARNING

    def test_load_json(self, tmp_path):
        path = tmp_path / "capkit.json"
        path.write_text(json.dumps({"registry": {"cache_singletons": True}}))

        data = ConfigurationLoader.load_from_file(str(path))

        assert data == {"registry": {"cache_singletons": True}}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert ConfigurationLoader.load_from_file(str(path)) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigurationLoader.load_from_file(str(tmp_path / "missing.yml"))

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Failed to read"):
            ConfigurationLoader.load_from_file(str(path))

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            ConfigurationLoader.load_from_file(str(path))

    def test_file_values_expand_environment(self, tmp_path):
        path = tmp_path / "capkit.yml"
        path.write_text("logging:\n  file:\n    path: $LOG_ROOT/capkit.log\n")

        with patch.dict(os.environ, {"LOG_ROOT": "/tmp/logs"}):
            data = ConfigurationLoader.load_from_file(str(path))

        assert data["logging"]["file"]["path"] == "/tmp/logs/capkit.log"

    def test_config_file_from_environment(self, tmp_path):
        path = tmp_path / "capkit.yml"
        path.write_text("registry:\n  seal_after_load: false\n")

        with patch.dict(os.environ, {"CAPKIT_CONFIG": str(path)}):
            data = ConfigurationLoader.load()

        assert data == {"registry": {"seal_after_load": False}}

    def test_no_file_uses_defaults(self):
        assert ConfigurationLoader.load() == {}

    def test_environment_overrides(self):
        """Test that CAPKIT_* variables override file values."""
        data = {"logging": {"level": "INFO"}, "registry": {"policy": "last_wins"}}
        overrides = {"CAPKIT_LOG_LEVEL": "DEBUG", "CAPKIT_REGISTRY_POLICY": "strict"}

        with patch.dict(os.environ, overrides):
            result = ConfigurationLoader.apply_environment_overrides(data)

        assert result["logging"]["level"] == "DEBUG"
        assert result["registry"]["policy"] == "strict"
        assert data["logging"]["level"] == "INFO"

    def test_override_into_non_mapping_section(self):
        with patch.dict(os.environ, {"CAPKIT_LOG_LEVEL": "DEBUG"}):
            with pytest.raises(ConfigurationError, match="must be a mapping"):
                ConfigurationLoader.apply_environment_overrides({"logging": "loud"})

    def test_invalid_configuration(self):
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            ConfigurationLoader.create_app_config({"registry": {"policy": "first_wins"}})


class TestConfigurationManager:
    """Test the configuration manager."""

    def test_lazy_loading_and_get(self, tmp_path):
        path = tmp_path / "capkit.yml"
        path.write_text("registry:\n  policy: strict\n")
        manager = ConfigurationManager(str(path))

        assert manager.get("registry.policy") == "strict"
        assert manager.get("logging.level") == "INFO"
        assert manager.get("registry.unknown", "fallback") == "fallback"
        assert manager.app_config is manager.app_config

    def test_reload(self, tmp_path):
        path = tmp_path / "capkit.yml"
        path.write_text("registry:\n  policy: strict\n")
        manager = ConfigurationManager(str(path))
        assert manager.get("registry.policy") == "strict"

        path.write_text("registry:\n  policy: last_wins\n")
        manager.reload()

        assert manager.get("registry.policy") == "last_wins"

    def test_global_manager(self, tmp_path):
        assert get_config_manager() is get_config_manager()

        path = tmp_path / "capkit.yml"
        path.write_text("{}")
        manager = get_config_manager(str(path))

        assert manager is get_config_manager()
        assert manager is not get_config_manager(str(tmp_path / "other.yml"))
