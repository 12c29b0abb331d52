"""
Composer - builds composites by resolving capabilities from a registry.

The composer is the only place implementations meet the objects that use
them: a composite receives fully built instances through its constructor
and never instantiates an implementation itself.
"""
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Set, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from capkit.domain.base.exceptions import (
    CapabilityError,
    InstantiationError,
    MissingDependencyError,
    UnresolvedCapabilityError,
    ValidationError,
)
from capkit.domain.base.ports import ComposerPort, RegistryPort
from capkit.domain.capability import CapabilityKey, as_capability_name
from capkit.domain.composite import Composite, CompositionSpec
from capkit.infrastructure.di.decorators import composite_name, requirements_of
from capkit.infrastructure.logging.logger import get_logger

T = TypeVar("T")
logger = get_logger(__name__)


class Composer(ComposerPort):
    """
    Composes high-level objects from registered capability implementations.

    Every role is resolved before anything is constructed. Unresolved roles
    are collected and reported together in one MissingDependencyError, so a
    caller never observes a partially initialized composite.
    """

    def __init__(self, registry: RegistryPort):
        self.registry = registry

    def compose(self,
                spec: Mapping[str, CapabilityKey],
                target: Optional[Callable[..., Any]] = None,
                selections: Optional[Mapping[str, str]] = None,
                optional: Optional[Iterable[str]] = None,
                name: Optional[str] = None,
                **config: Any) -> Any:
        """
        Compose an object from a role -> capability mapping.

        Args:
            spec: Mapping of role name to capability key
            target: Composite constructor; a generic Composite is built when None
            selections: Optional role -> implementation name for explicit selection
            optional: Roles that receive None when their capability is not registered
            name: Composite name used in errors and logs
            **config: Extra constructor keyword arguments for the target

        Returns:
            The composed object

        Raises:
            MissingDependencyError: If one or more roles cannot be resolved
            InstantiationError: If the target constructor fails
            ValidationError: If the role mapping is malformed
        """
        composition = self._build_spec(
            name or (composite_name(target) if target is not None else "composite"),
            {role: as_capability_name(key) for role, key in spec.items()},
            optional or (),
            selections or {},
        )
        return self._compose(composition, target, config)

    def compose_type(self, cls: Type[T], selections: Optional[Mapping[str, str]] = None,
                     **config: Any) -> T:
        """
        Compose an instance of a class from its constructor annotations.

        Capability-typed constructor parameters become roles; ``Optional``
        or defaulted ones become optional roles. Roles given in ``config``
        are passed through as-is and not resolved.

        Args:
            cls: Composite class
            selections: Optional role -> implementation name for explicit selection
            **config: Non-capability constructor arguments

        Returns:
            Instance of ``cls``
        """
        requirements = {
            role: requirement for role, requirement in requirements_of(cls).items()
            if role not in config
        }
        composition = self._build_spec(
            composite_name(cls),
            {role: requirement.capability for role, requirement in requirements.items()},
            [role for role, requirement in requirements.items() if requirement.optional],
            selections or {},
        )
        defaulted = {role for role, requirement in requirements.items() if requirement.has_default}
        return self._compose(composition, cls, config, defaulted)

    def _build_spec(self, name: str, roles: Dict[str, str], optional: Iterable[str],
                    selections: Mapping[str, str]) -> CompositionSpec:
        try:
            return CompositionSpec(
                name=name,
                roles=roles,
                optional=frozenset(optional),
                selections=dict(selections),
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid composition spec for '{name}': {e}", details=e.errors()) from e

    def _compose(self, spec: CompositionSpec, target: Optional[Callable[..., Any]],
                 config: Dict[str, Any], defaulted: Optional[Set[str]] = None) -> Any:
        clashing = set(spec.roles) & set(config)
        if clashing:
            raise ValidationError(
                f"Configuration for '{spec.name}' overlaps capability roles: {sorted(clashing)}"
            )
        if target is None and config:
            raise ValidationError(
                f"Configuration values {sorted(config)} require a target for '{spec.name}'"
            )

        logger.debug(f"Composing '{spec.name}' with roles {spec.roles}")

        instances: Dict[str, Any] = {}
        missing: Dict[str, str] = {}
        causes: Dict[str, Exception] = {}

        for role, capability_name in spec.roles.items():
            try:
                instances[role] = self.registry.resolve(capability_name, spec.selections.get(role))
            except UnresolvedCapabilityError as e:
                if spec.is_optional(role) and e.is_unregistered(capability_name):
                    logger.debug(f"Optional role '{role}' of '{spec.name}' left empty: {e}")
                    # Defaulted constructor parameters keep their own default
                    if role not in (defaulted or ()):
                        instances[role] = None
                    continue
                missing[role] = capability_name
                causes[role] = e

        if missing:
            logger.warning(f"Cannot compose '{spec.name}', unresolved roles: {sorted(missing)}")
            raise MissingDependencyError(spec.name, missing, causes)

        if target is None:
            composite = Composite(spec.name, instances)
        else:
            try:
                composite = target(**instances, **config)
            except CapabilityError:
                raise
            except Exception as e:
                logger.error(f"Failed to construct '{spec.name}': {e}")
                raise InstantiationError(spec.name, e) from e

        logger.debug(f"Composed '{spec.name}'")
        return composite
