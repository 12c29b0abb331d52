"""Registration value object - a capability bound to an implementation factory."""
from typing import Any, Callable, Dict, Optional

from capkit.domain.capability.capability import Capability
from capkit.domain.capability.value_objects import Lifetime


class Registration:
    """Container for capability registration information."""

    def __init__(self,
                 capability_name: str,
                 name: str,
                 factory: Callable[..., Any],
                 lifetime: Lifetime = Lifetime.TRANSIENT,
                 config: Optional[Dict[str, Any]] = None,
                 capability: Optional[Capability] = None):
        """
        Initialize registration.

        Args:
            capability_name: Name of the capability being implemented
            name: Implementation name, unique per capability
            factory: Callable producing an implementation instance
            lifetime: Whether instances are created per resolution or cached
            config: Keyword arguments passed to the factory
            capability: Method contract, when the capability was given as an interface
        """
        self.capability_name = capability_name
        self.name = name
        self.factory = factory
        self.lifetime = lifetime
        self.config = dict(config or {})
        self.capability = capability

    @property
    def key(self) -> tuple:
        return (self.capability_name, self.name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert registration to a plain dictionary for display."""
        factory_name = getattr(self.factory, "__qualname__", repr(self.factory))
        return {
            "capability": self.capability_name,
            "name": self.name,
            "factory": f"{getattr(self.factory, '__module__', '?')}.{factory_name}",
            "lifetime": self.lifetime.value,
            "config": dict(self.config),
            "methods": sorted(self.capability.methods) if self.capability else [],
        }

    def __repr__(self) -> str:
        return (f"Registration(capability='{self.capability_name}', name='{self.name}', "
                f"lifetime='{self.lifetime.value}')")
