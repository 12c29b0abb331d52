"""Capability Registry - registry pattern for capability implementation factories.

This module maps capability names to implementation factories. Consumers ask
for a capability and receive an instance of whichever implementation is
registered for it, so new implementations are added by registration alone.

Registration happens during initialization; afterwards the registry is
sealed and resolution is a concurrent read-only operation guarded by a
reader/writer lock.
"""
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from capkit.domain.base.exceptions import (
    CapabilityContractError,
    CapabilityError,
    CircularDependencyError,
    DuplicateRegistrationError,
    FactoryError,
    RegistryFrozenError,
    UnresolvedCapabilityError,
)
from capkit.domain.base.ports import RegistryPort
from capkit.domain.capability import (
    Capability,
    CapabilityKey,
    CapabilityView,
    Lifetime,
    Registration,
    RegistrationPolicy,
    as_capability,
    as_capability_name,
)
from capkit.domain.composite.requirements import get_requirements
from capkit.infrastructure.logging.logger import get_logger
from capkit.infrastructure.patterns.lock_manager import LockManager

logger = get_logger(__name__)


@contextmanager
def timed_operation(operation_name: str) -> Iterator[None]:
    """Context manager to time and log an operation."""
    start_time = time.time()
    try:
        yield
    finally:
        elapsed_time = time.time() - start_time
        logger.debug(f"{operation_name} completed in {elapsed_time:.4f}s")


class CapabilityRegistry(RegistryPort):
    """
    Registry for capability implementation factories.

    Several implementations may be registered for one capability. Under
    ``LAST_WINS`` the most recent registration is the default and earlier
    ones stay selectable by name; under ``STRICT`` a second registration
    for a capability is rejected.

    Implementation constructors may declare capability-typed parameters;
    those are resolved from this registry when the implementation is built.
    """

    def __init__(self,
                 policy: RegistrationPolicy = RegistrationPolicy.LAST_WINS,
                 cache_singletons: bool = False,
                 restrict_to_contract: bool = False):
        """
        Initialize capability registry.

        Args:
            policy: How a second registration for the same capability is treated
            cache_singletons: Default registrations to one cached instance each
            restrict_to_contract: Return instances wrapped in a CapabilityView
        """
        self.policy = RegistrationPolicy(policy)
        self.cache_singletons = cache_singletons
        self.restrict_to_contract = restrict_to_contract

        self._registrations: Dict[str, List[Registration]] = {}
        self._capabilities: Dict[str, Capability] = {}
        self._instances: Dict[Tuple[str, str], Any] = {}
        self._sealed = False

        self.lock_manager = LockManager("reader_writer")
        self._instance_lock = threading.RLock()

        logger.debug(f"Capability registry initialized with policy '{self.policy.value}'")

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self,
                 capability: CapabilityKey,
                 factory: Callable[..., Any],
                 name: Optional[str] = None,
                 lifetime: Optional[Lifetime] = None,
                 config: Optional[Dict[str, Any]] = None) -> Registration:
        """
        Register an implementation factory for a capability.

        Args:
            capability: Capability interface, Capability or capability name
            factory: Callable (usually a class) producing an implementation
            name: Implementation name, defaults to the factory's name
            lifetime: Instance lifetime, defaults from ``cache_singletons``
            config: Keyword arguments passed to the factory

        Returns:
            The created registration

        Raises:
            DuplicateRegistrationError: If the policy is STRICT and the capability is registered
            RegistryFrozenError: If the registry is sealed
            CapabilityContractError: If the factory is not callable or the contract conflicts
        """
        capability_name = as_capability_name(capability)
        contract = as_capability(capability)

        if not callable(factory):
            raise CapabilityContractError(
                capability_name, f"Factory for capability '{capability_name}' is not callable"
            )

        implementation_name = name or getattr(factory, "__name__", None) or type(factory).__name__
        if lifetime is None:
            lifetime = Lifetime.SINGLETON if self.cache_singletons else Lifetime.TRANSIENT

        registration = Registration(
            capability_name=capability_name,
            name=implementation_name,
            factory=factory,
            lifetime=Lifetime(lifetime),
            config=config,
            capability=contract,
        )

        with self.lock_manager.write_lock():
            if self._sealed:
                raise RegistryFrozenError(capability_name)

            existing = self._registrations.get(capability_name, [])
            if existing and self.policy == RegistrationPolicy.STRICT:
                raise DuplicateRegistrationError(capability_name, implementation_name, existing[-1].name)

            known = self._capabilities.get(capability_name)
            if contract is not None and known is not None and known.methods != contract.methods:
                raise CapabilityContractError(
                    capability_name,
                    f"Capability '{capability_name}' is already declared with methods "
                    f"{sorted(known.methods)}",
                )

            if contract is None:
                registration.capability = known

            remaining = [r for r in existing if r.name != implementation_name]
            if existing:
                logger.info(
                    f"Capability '{capability_name}' default changed: "
                    f"'{existing[-1].name}' -> '{implementation_name}'"
                )
            self._instances.pop(registration.key, None)
            self._registrations[capability_name] = remaining + [registration]
            if contract is not None:
                self._capabilities[capability_name] = contract
                for earlier in remaining:
                    earlier.capability = contract

        logger.info(f"Registered '{implementation_name}' for capability '{capability_name}'")
        logger.debug(f"Capability registration: {registration}")
        return registration

    def unregister(self, capability: CapabilityKey, name: Optional[str] = None) -> bool:
        """
        Remove registrations for a capability.

        Args:
            capability: Capability to unregister
            name: Only remove this implementation, otherwise remove all

        Returns:
            True if anything was removed, False otherwise

        Raises:
            RegistryFrozenError: If the registry is sealed
        """
        capability_name = as_capability_name(capability)

        with self.lock_manager.write_lock():
            if self._sealed:
                raise RegistryFrozenError(capability_name)

            existing = self._registrations.get(capability_name, [])
            removed = [r for r in existing if name is None or r.name == name]
            if not removed:
                return False

            for registration in removed:
                self._instances.pop(registration.key, None)

            remaining = [r for r in existing if r not in removed]
            if remaining:
                self._registrations[capability_name] = remaining
            else:
                self._registrations.pop(capability_name, None)
                self._capabilities.pop(capability_name, None)

        logger.debug(f"Unregistered {[r.name for r in removed]} from capability '{capability_name}'")
        return True

    def seal(self) -> None:
        """End the initialization phase; later registration attempts fail."""
        with self.lock_manager.write_lock():
            self._sealed = True
        logger.info("Capability registry sealed")

    @property
    def is_sealed(self) -> bool:
        with self.lock_manager.read_lock():
            return self._sealed

    def clear_registrations(self) -> None:
        """
        Clear all registrations and cached instances.

        This method is primarily for testing purposes and also unseals the registry.
        """
        with self.lock_manager.write_lock():
            self._registrations.clear()
            self._capabilities.clear()
            self._sealed = False
        with self._instance_lock:
            self._instances.clear()
        logger.debug("Cleared all capability registrations")

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, capability: CapabilityKey, name: Optional[str] = None) -> Any:
        """
        Resolve an implementation instance for a capability.

        Args:
            capability: Capability interface, Capability or capability name
            name: Explicitly selected implementation, otherwise the default

        Returns:
            Implementation instance (or a CapabilityView of it)

        Raises:
            UnresolvedCapabilityError: If nothing is registered for the capability or name
            CapabilityContractError: If the instance does not satisfy the contract
            CircularDependencyError: If implementation constructors form a cycle
            FactoryError: If the implementation factory fails
        """
        capability_name = as_capability_name(capability)
        with timed_operation(f"Resolve {capability_name}"):
            return self._resolve(capability_name, name, [])

    def _resolve(self, capability_name: str, name: Optional[str], chain: List[Tuple[str, str]]) -> Any:
        registration = self._get_registration(capability_name, name)

        if registration.key in chain:
            cycle = [f"{c}({n})" for c, n in chain + [registration.key]]
            raise CircularDependencyError(cycle)

        logger.debug(
            f"Resolving capability '{capability_name}' with '{registration.name}'"
            + (f" for '{chain[-1][0]}'" if chain else "")
        )

        if registration.lifetime == Lifetime.SINGLETON:
            instance = self._get_singleton(registration, chain)
        else:
            instance = self._create_instance(registration, chain)

        contract = registration.capability
        if self.restrict_to_contract and contract is not None:
            return CapabilityView(contract, instance)
        return instance

    def _get_singleton(self, registration: Registration, chain: List[Tuple[str, str]]) -> Any:
        instance = self._instances.get(registration.key)
        if instance is not None:
            logger.debug(f"Using cached instance of '{registration.name}'")
            return instance

        with self._instance_lock:
            # Double-checked so concurrent resolvers share one instance
            instance = self._instances.get(registration.key)
            if instance is not None:
                return instance

            instance = self._create_instance(registration, chain)
            with self.lock_manager.read_lock():
                # Registration changes drop cached instances under the write lock;
                # an instance built from a replaced registration is not stored
                if self._is_current(registration):
                    self._instances[registration.key] = instance
                    logger.debug(f"Cached singleton instance of '{registration.name}'")
                else:
                    logger.debug(f"Registration '{registration.name}' was replaced, instance not cached")
            return instance

    def _is_current(self, registration: Registration) -> bool:
        return any(r is registration for r in self._registrations.get(registration.capability_name, []))

    def _create_instance(self, registration: Registration, chain: List[Tuple[str, str]]) -> Any:
        kwargs = dict(registration.config)
        next_chain = chain + [registration.key]

        for role, requirement in get_requirements(registration.factory).items():
            if role in kwargs:
                continue
            try:
                kwargs[role] = self._resolve(requirement.capability, None, next_chain)
            except UnresolvedCapabilityError as e:
                # Only the requirement's own capability may be absent; a failure
                # further down the dependency graph is a configuration error
                if not requirement.optional or not e.is_unregistered(requirement.capability):
                    raise
                logger.debug(f"Optional dependency '{role}' of '{registration.name}' is not registered")
                if not requirement.has_default:
                    kwargs[role] = None

        try:
            instance = registration.factory(**kwargs)
        except CapabilityError:
            raise
        except Exception as e:
            logger.error(
                f"Factory '{registration.name}' failed for capability "
                f"'{registration.capability_name}': {e}"
            )
            raise FactoryError(registration.capability_name, registration.name, e) from e

        contract = registration.capability
        if contract is not None:
            missing = contract.missing_methods(instance)
            if missing:
                raise CapabilityContractError(
                    contract.name,
                    f"Implementation '{registration.name}' does not satisfy capability "
                    f"'{contract.name}': missing {missing}",
                    missing_methods=missing,
                )

        return instance

    def _get_registration(self, capability_name: str, name: Optional[str] = None) -> Registration:
        """
        Get registration for the given capability.

        Raises:
            UnresolvedCapabilityError: If no matching registration exists
        """
        with self.lock_manager.read_lock():
            registrations = self._registrations.get(capability_name)
            if not registrations:
                raise UnresolvedCapabilityError(capability_name)

            if name is None:
                return registrations[-1]

            for registration in registrations:
                if registration.name == name:
                    return registration

            raise UnresolvedCapabilityError(
                capability_name, name, available=[r.name for r in registrations]
            )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def is_registered(self, capability: CapabilityKey) -> bool:
        """Check if any implementation is registered for a capability."""
        capability_name = as_capability_name(capability)
        with self.lock_manager.read_lock():
            return bool(self._registrations.get(capability_name))

    def get_registered_capabilities(self) -> List[str]:
        """Get names of all registered capabilities."""
        with self.lock_manager.read_lock():
            return list(self._registrations.keys())

    def get_implementations(self, capability: CapabilityKey) -> List[str]:
        """Get implementation names for a capability, default last."""
        capability_name = as_capability_name(capability)
        with self.lock_manager.read_lock():
            return [r.name for r in self._registrations.get(capability_name, [])]

    def get_registration(self, capability: CapabilityKey, name: Optional[str] = None) -> Registration:
        """Get the default (or named) registration for a capability."""
        return self._get_registration(as_capability_name(capability), name)

    def get_registrations(self) -> Dict[str, List[Registration]]:
        """Get a snapshot of all registrations."""
        with self.lock_manager.read_lock():
            return {cap: list(regs) for cap, regs in self._registrations.items()}

    def get_stats(self) -> Dict[str, Any]:
        """Get registry statistics."""
        with self.lock_manager.read_lock():
            stats = {
                "policy": self.policy.value,
                "sealed": self._sealed,
                "capabilities": len(self._registrations),
                "registrations": sum(len(regs) for regs in self._registrations.values()),
                "lifetimes": {
                    lifetime.value: sum(
                        1 for regs in self._registrations.values()
                        for r in regs if r.lifetime == lifetime
                    )
                    for lifetime in Lifetime
                },
            }
        with self._instance_lock:
            stats["singleton_instances"] = len(self._instances)
        return stats


# Global registry instance
_capability_registry: Optional[CapabilityRegistry] = None
_registry_lock = threading.Lock()


def get_capability_registry() -> CapabilityRegistry:
    """
    Get the global capability registry instance.

    Returns:
        Capability registry singleton instance
    """
    global _capability_registry
    if _capability_registry is None:
        with _registry_lock:
            if _capability_registry is None:
                _capability_registry = CapabilityRegistry()
    return _capability_registry


def reset_capability_registry() -> None:
    """
    Reset the global capability registry instance.

    This function is primarily for testing purposes.
    """
    global _capability_registry
    with _registry_lock:
        _capability_registry = None
