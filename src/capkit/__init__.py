"""capkit - capability registry and composer.

Compose high-level objects from independently substitutable strategy
implementations selected by capability rather than concrete type:

    registry = CapabilityRegistry()
    registry.register(Door, WoodenDoor)
    registry.register(Bowl, FruitBowl)

    cage = Composer(registry).compose({"door": Door, "bowl": Bowl})
"""

__version__ = "0.1.0"

from capkit.domain.base.exceptions import (  # noqa: E402
    DuplicateRegistrationError,
    MissingDependencyError,
    UnresolvedCapabilityError,
)
from capkit.domain.capability import Capability, Lifetime, RegistrationPolicy, capability  # noqa: E402
from capkit.domain.composite import Composite  # noqa: E402
from capkit.infrastructure.di import Composer, composite  # noqa: E402
from capkit.infrastructure.registry import CapabilityRegistry  # noqa: E402

__all__ = [
    "Capability",
    "CapabilityRegistry",
    "Composer",
    "Composite",
    "DuplicateRegistrationError",
    "Lifetime",
    "MissingDependencyError",
    "RegistrationPolicy",
    "UnresolvedCapabilityError",
    "capability",
    "composite",
    "__version__",
]
