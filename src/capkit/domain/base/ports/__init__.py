"""Domain ports for infrastructure concerns."""

from .composer_port import ComposerPort
from .registry_port import RegistryPort

__all__ = [
    "ComposerPort",
    "RegistryPort",
]
