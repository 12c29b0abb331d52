"""
Capability contracts.

A capability is a named, immutable set of method names. Capabilities are
declared as abstract base classes decorated with ``@capability``:

    @capability
    class Door(ABC):
        @abstractmethod
        def open(self) -> str: ...

Implementations satisfy a capability structurally: every declared method must
be a callable attribute of the implementation instance.
"""
from typing import Any, Callable, FrozenSet, List, Optional, Type, TypeVar, Union, overload

from pydantic import BaseModel, ConfigDict, field_validator

from capkit.domain.base.exceptions import CapabilityContractError

T = TypeVar("T")

CAPABILITY_ATTRIBUTE = "__capability__"


class Capability(BaseModel):
    """Named method contract a strategy implementation must satisfy."""
    model_config = ConfigDict(frozen=True)

    name: str
    methods: FrozenSet[str]

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate capability name."""
        if not v or not v.strip():
            raise ValueError("Capability name cannot be empty")
        return v.strip()

    @field_validator("methods")
    @classmethod
    def validate_methods(cls, v: FrozenSet[str]) -> FrozenSet[str]:
        """A capability declares at least one method."""
        if not v:
            raise ValueError("Capability must declare at least one method")
        return v

    def missing_methods(self, implementation: Any) -> List[str]:
        """Return the contract methods the implementation does not provide."""
        return sorted(
            method for method in self.methods
            if not callable(getattr(implementation, method, None))
        )

    def is_satisfied_by(self, implementation: Any) -> bool:
        """Check whether the implementation provides every contract method."""
        return not self.missing_methods(implementation)

    def __str__(self) -> str:
        return self.name


def _declare(cls: Type[T], name: Optional[str]) -> Type[T]:
    methods = frozenset(getattr(cls, "__abstractmethods__", frozenset()))
    capability_name = name or cls.__name__

    if not methods:
        raise CapabilityContractError(
            capability_name,
            f"Capability '{capability_name}' must declare at least one abstract method",
        )

    setattr(cls, CAPABILITY_ATTRIBUTE, Capability(name=capability_name, methods=methods))
    return cls


@overload
def capability(cls: Type[T]) -> Type[T]: ...


@overload
def capability(*, name: Optional[str] = None) -> Callable[[Type[T]], Type[T]]: ...


def capability(cls: Optional[Type[T]] = None, *, name: Optional[str] = None):
    """
    Declare an abstract base class as a capability interface.

    Usage:
        @capability
        class Door(ABC): ...

        @capability(name="storage")
        class InvoicePersistable(ABC): ...

    Args:
        cls: The abstract class being declared
        name: Optional capability name, defaults to the class name

    Returns:
        The same class with its ``Capability`` attached

    Raises:
        CapabilityContractError: If the class declares no abstract methods
    """
    if cls is None:
        return lambda target: _declare(target, name)
    return _declare(cls, name)


def is_capability_interface(obj: Any) -> bool:
    """Check if an object is a class declared with ``@capability``."""
    return isinstance(obj, type) and isinstance(vars(obj).get(CAPABILITY_ATTRIBUTE), Capability)


def get_capability(interface: type) -> Capability:
    """Get the capability declared by an interface class."""
    if not is_capability_interface(interface):
        raise CapabilityContractError(
            getattr(interface, "__name__", str(interface)),
            f"{interface!r} is not declared as a capability",
        )
    return vars(interface)[CAPABILITY_ATTRIBUTE]


CapabilityKey = Union[Capability, type, str]


def as_capability_name(key: CapabilityKey) -> str:
    """
    Normalize a capability key to its name.

    Args:
        key: A ``Capability``, a ``@capability`` interface class or a name

    Returns:
        The capability name

    Raises:
        CapabilityContractError: If the key is none of the accepted forms
    """
    if isinstance(key, Capability):
        return key.name
    if isinstance(key, str):
        if not key.strip():
            raise CapabilityContractError(key, "Capability name cannot be empty")
        return key.strip()
    return get_capability(key).name


def as_capability(key: CapabilityKey) -> Optional[Capability]:
    """Return the ``Capability`` for a key, or None for a bare name."""
    if isinstance(key, Capability):
        return key
    if isinstance(key, str):
        as_capability_name(key)
        return None
    return get_capability(key)


class CapabilityView:
    """
    Restricts an implementation to the methods of one capability.

    Attribute access outside the capability contract raises AttributeError,
    so callers cannot come to depend on implementation-specific behavior.
    """

    __slots__ = ("_capability", "_target")

    def __init__(self, capability: Capability, target: Any):
        object.__setattr__(self, "_capability", capability)
        object.__setattr__(self, "_target", target)

    def __getattr__(self, item: str) -> Any:
        # Slots are read directly; an unset slot must not re-enter __getattr__
        contract = object.__getattribute__(self, "_capability")
        if item in contract.methods:
            return getattr(object.__getattribute__(self, "_target"), item)
        raise AttributeError(f"'{item}' is not part of capability '{contract.name}'")

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"Capability view for '{self._capability.name}' is read-only")

    @property
    def capability(self) -> Capability:
        return self._capability

    def __repr__(self) -> str:
        return f"CapabilityView({self._capability.name}, {type(self._target).__name__})"


def unwrap(instance: Any) -> Any:
    """Return the implementation behind a CapabilityView, or the instance itself."""
    if isinstance(instance, CapabilityView):
        return object.__getattribute__(instance, "_target")
    return instance
