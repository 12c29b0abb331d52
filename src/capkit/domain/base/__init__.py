"""Base domain layer - shared kernel for capabilities and composites."""

from .exceptions import (
    CapabilityContractError,
    CapabilityError,
    CircularDependencyError,
    ConfigurationError,
    DomainException,
    DuplicateRegistrationError,
    FactoryError,
    InstantiationError,
    MissingDependencyError,
    RegistryFrozenError,
    UnresolvedCapabilityError,
    ValidationError,
)

__all__ = [
    "DomainException",
    "ValidationError",
    "ConfigurationError",
    "CapabilityError",
    "CapabilityContractError",
    "UnresolvedCapabilityError",
    "DuplicateRegistrationError",
    "RegistryFrozenError",
    "CircularDependencyError",
    "FactoryError",
    "MissingDependencyError",
    "InstantiationError",
]
