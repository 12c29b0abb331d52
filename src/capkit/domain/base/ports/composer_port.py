"""Composer port for dependency injection concerns."""
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Mapping, Optional, Type, TypeVar

from capkit.domain.capability import CapabilityKey

T = TypeVar("T")


class ComposerPort(ABC):
    """Port for building composites from registered capabilities."""

    @abstractmethod
    def compose(self, spec: Mapping[str, CapabilityKey],
                target: Optional[Callable[..., Any]] = None,
                selections: Optional[Mapping[str, str]] = None,
                optional: Optional[Iterable[str]] = None,
                name: Optional[str] = None,
                **config: Any) -> Any:
        """Compose an object from a role -> capability mapping."""

    @abstractmethod
    def compose_type(self, cls: Type[T], selections: Optional[Mapping[str, str]] = None,
                     **config: Any) -> T:
        """Compose an instance of a class from its constructor annotations."""
