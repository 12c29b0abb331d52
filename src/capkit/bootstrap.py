"""Application bootstrap - registry and composer wiring from configuration."""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

from capkit.config import AppConfig, get_config_manager
from capkit.infrastructure.di.composer import Composer
from capkit.infrastructure.logging.logger import get_logger, setup_logging
from capkit.infrastructure.registry.capability_registry import CapabilityRegistry
from capkit.infrastructure.registry.registration import register_from_config

T = TypeVar("T")


class Application:
    """
    Application context: configuration, logging, registry and composer.

    ``initialize`` is the registration phase. Once it returns the registry
    is sealed (unless configured otherwise) and only resolution happens.
    """

    def __init__(self, config_path: Optional[str] = None, config: Optional[AppConfig] = None) -> None:
        """Initialize the instance."""
        self.config_path = config_path
        self._config = config
        self._initialized = False

        self._registry: Optional[CapabilityRegistry] = None
        self._composer: Optional[Composer] = None

        self.logger = get_logger(__name__)

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            self._config = get_config_manager(self.config_path).app_config
        return self._config

    def initialize(self) -> bool:
        """
        Initialize the application.

        Returns:
            True once initialized; repeated calls are no-ops
        """
        if self._initialized:
            return True

        config = self.config
        setup_logging(config.logging)

        registry_config = config.registry
        registry = CapabilityRegistry(
            policy=registry_config.policy,
            cache_singletons=registry_config.cache_singletons,
            restrict_to_contract=registry_config.restrict_to_contract,
        )

        if registry_config.include_catalog:
            from capkit.catalog import register_catalog

            register_catalog(registry)

        register_from_config(registry, registry_config)

        if registry_config.seal_after_load:
            registry.seal()

        self._registry = registry
        self._composer = Composer(registry)
        self._initialized = True

        self.logger.info(
            f"Application initialized with {len(registry.get_registered_capabilities())} capabilities"
        )
        return True

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self.initialize()

    @property
    def registry(self) -> CapabilityRegistry:
        self._ensure_initialized()
        return self._registry

    @property
    def composer(self) -> Composer:
        self._ensure_initialized()
        return self._composer

    def compose(self, *args: Any, **kwargs: Any) -> Any:
        """Compose an object; see Composer.compose."""
        return self.composer.compose(*args, **kwargs)

    def compose_type(self, cls: Type[T], **kwargs: Any) -> T:
        """Compose an instance of a class; see Composer.compose_type."""
        return self.composer.compose_type(cls, **kwargs)
