"""Domain exceptions - error types surfaced by registration and composition."""
from typing import Any, Dict, List, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(DomainException):
    """Raised when domain validation fails."""
    pass


class ConfigurationError(DomainException):
    """Raised when there's an issue with configuration."""

    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class CapabilityError(DomainException):
    """Base exception for capability registration and composition errors."""
    pass


class CapabilityContractError(CapabilityError):
    """Raised when a capability or an implementation breaks its method contract."""

    def __init__(self, capability_name: str, message: str,
                 missing_methods: Optional[List[str]] = None):
        super().__init__(message)
        self.capability_name = capability_name
        self.missing_methods = sorted(missing_methods or [])


class UnresolvedCapabilityError(CapabilityError):
    """Raised when no implementation is registered for a requested capability."""

    def __init__(self, capability_name: str, implementation_name: Optional[str] = None,
                 available: Optional[List[str]] = None):
        self.capability_name = capability_name
        self.implementation_name = implementation_name
        self.available = list(available or [])

        if implementation_name:
            message = (f"Implementation '{implementation_name}' is not registered "
                       f"for capability '{capability_name}'. "
                       f"Available implementations: {self.available}")
        else:
            message = f"No implementation registered for capability '{capability_name}'"
        super().__init__(message)

    def is_unregistered(self, capability_name: str) -> bool:
        """Check if the error means ``capability_name`` itself has no registration."""
        return self.capability_name == capability_name and self.implementation_name is None


class DuplicateRegistrationError(CapabilityError):
    """Raised when a strict registry receives a second registration for a capability."""

    def __init__(self, capability_name: str, implementation_name: str, existing_name: str):
        super().__init__(
            f"Capability '{capability_name}' is already registered "
            f"(existing: '{existing_name}', rejected: '{implementation_name}')"
        )
        self.capability_name = capability_name
        self.implementation_name = implementation_name
        self.existing_name = existing_name


class RegistryFrozenError(CapabilityError):
    """Raised when registrations change after the initialization phase."""

    def __init__(self, capability_name: str):
        super().__init__(
            f"Registry is sealed; cannot change registrations for '{capability_name}'"
        )
        self.capability_name = capability_name


class CircularDependencyError(CapabilityError):
    """Raised when implementation constructors depend on each other in a cycle."""

    def __init__(self, chain: List[str]):
        super().__init__(f"Circular dependency detected: {' -> '.join(chain)}")
        self.chain = list(chain)


class FactoryError(CapabilityError):
    """Raised when an implementation factory fails."""

    def __init__(self, capability_name: str, implementation_name: str, cause: Exception):
        super().__init__(
            f"Factory '{implementation_name}' for capability '{capability_name}' "
            f"failed: {cause}"
        )
        self.capability_name = capability_name
        self.implementation_name = implementation_name
        self.cause = cause


class MissingDependencyError(CapabilityError):
    """
    Raised when composition cannot resolve one or more roles.

    All unresolved roles are reported at once, mapped to the capability
    each role required.
    """

    def __init__(self, composite_name: str, missing: Dict[str, str],
                 causes: Optional[Dict[str, Exception]] = None):
        self.composite_name = composite_name
        self.missing = dict(missing)
        self.causes = dict(causes or {})

        listed = ", ".join(f"{role} ({capability})" for role, capability in self.missing.items())
        super().__init__(
            f"Cannot compose '{composite_name}': {len(self.missing)} unresolved role(s): {listed}",
            details={"missing": self.missing},
        )

    @property
    def roles(self) -> List[str]:
        """Unresolved role names in declaration order."""
        return list(self.missing.keys())

    @property
    def capabilities(self) -> List[str]:
        """Capability names that could not be resolved."""
        return list(self.missing.values())


class InstantiationError(CapabilityError):
    """Raised when a composite constructor fails after every role resolved."""

    def __init__(self, composite_name: str, cause: Exception):
        super().__init__(f"Failed to construct '{composite_name}': {cause}")
        self.composite_name = composite_name
        self.cause = cause
