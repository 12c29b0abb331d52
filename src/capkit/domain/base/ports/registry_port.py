"""Registry port for capability registration concerns."""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from capkit.domain.capability import CapabilityKey, Lifetime, Registration


class RegistryPort(ABC):
    """Port for capability registry operations."""

    @abstractmethod
    def register(self, capability: CapabilityKey, factory: Callable[..., Any],
                 name: Optional[str] = None, lifetime: Optional[Lifetime] = None,
                 config: Optional[Dict[str, Any]] = None) -> Registration:
        """Register an implementation factory for a capability."""

    @abstractmethod
    def resolve(self, capability: CapabilityKey, name: Optional[str] = None) -> Any:
        """Resolve an implementation instance for a capability."""

    @abstractmethod
    def is_registered(self, capability: CapabilityKey) -> bool:
        """Check if any implementation is registered for a capability."""

    @abstractmethod
    def get_registered_capabilities(self) -> List[str]:
        """Get names of all registered capabilities."""
