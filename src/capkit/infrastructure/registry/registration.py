"""Registration of capability implementations from configuration."""
import importlib
from typing import Any, List

from capkit.config.schemas.registry_schema import RegistryConfig
from capkit.domain.base.exceptions import ConfigurationError
from capkit.domain.capability import Registration, is_capability_interface
from capkit.infrastructure.logging.logger import get_logger
from capkit.infrastructure.registry.capability_registry import CapabilityRegistry

logger = get_logger(__name__)


def import_string(path: str) -> Any:
    """
    Import an attribute given as 'package.module:attribute'.

    Args:
        path: Import path with a colon separating module and attribute

    Returns:
        The imported attribute

    Raises:
        ConfigurationError: If the module or attribute cannot be imported
    """
    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        raise ConfigurationError(f"Invalid import path '{path}', expected 'module:attribute'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module '{module_name}': {e}") from e

    target: Any = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise ConfigurationError(f"Module '{module_name}' has no attribute '{attribute}'") from e
    return target


def _capability_key(reference: str) -> Any:
    """Capabilities are given by interface import path or by plain name."""
    if ":" not in reference:
        return reference

    interface = import_string(reference)
    if not is_capability_interface(interface):
        raise ConfigurationError(f"'{reference}' is not a capability interface")
    return interface


def register_from_config(registry: CapabilityRegistry, config: RegistryConfig) -> List[Registration]:
    """
    Register every enabled registration from registry configuration.

    Args:
        registry: Registry to register into
        config: Registry configuration

    Returns:
        Registrations created, in configuration order

    Raises:
        ConfigurationError: If a capability or implementation cannot be imported
    """
    registrations = []

    for entry in config.registrations:
        if not entry.enabled:
            logger.debug(f"Skipping disabled registration '{entry.implementation}'")
            continue

        capability = _capability_key(entry.capability)
        factory = import_string(entry.implementation)

        registrations.append(
            registry.register(
                capability,
                factory,
                name=entry.name,
                lifetime=entry.lifetime,
                config=entry.config,
            )
        )

    logger.info(f"Registered {len(registrations)} capability implementation(s) from configuration")
    return registrations
