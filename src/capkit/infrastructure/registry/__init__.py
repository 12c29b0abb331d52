"""Infrastructure registry patterns."""

from .capability_registry import (
    CapabilityRegistry,
    get_capability_registry,
    reset_capability_registry,
)
from .registration import import_string, register_from_config

__all__ = [
    "CapabilityRegistry",
    "get_capability_registry",
    "reset_capability_registry",
    "import_string",
    "register_from_config",
]
