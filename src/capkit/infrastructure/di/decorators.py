"""
Composite decorator for capability-based dependency injection.

Marks a class as a composite whose constructor receives capability
instances, and records which roles it requires.
"""
import logging
from typing import Any, Dict, Optional, Type, TypeVar

from capkit.domain.composite.requirements import Requirement, get_requirements

T = TypeVar("T")

# Logger for decorator operations
logger = logging.getLogger(__name__)


def _mark(cls: Type[T], name: Optional[str]) -> Type[T]:
    requirements = get_requirements(cls)

    cls._composite = True
    cls._composite_name = name or cls.__name__
    cls._requirements = requirements

    logger.debug(f"Made {cls.__name__} a composite requiring {sorted(requirements)}")
    return cls


def composite(cls: Optional[Type[T]] = None, *, name: Optional[str] = None):
    """
    Mark a class as a composite assembled from capabilities.

    The class constructor's type hints are analyzed once: every parameter
    annotated with a ``@capability`` interface becomes a role, and
    ``Optional[...]`` or defaulted ones become optional roles. The
    constructor itself is untouched, so composites can still be built by
    hand with explicit instances.

    Usage:
        @composite
        class Cage:
            def __init__(self, door: Door, bowl: Bowl, label: str = "cage"):
                ...

    Args:
        cls: The class to mark
        name: Composite name used in errors, defaults to the class name

    Returns:
        The same class with requirement metadata attached
    """
    if cls is None:
        return lambda target: _mark(target, name)
    return _mark(cls, name)


def is_composite(cls: Any) -> bool:
    """Check if a class has been marked as a composite."""
    return isinstance(cls, type) and vars(cls).get("_composite", False) is True


def composite_name(cls: Any) -> str:
    """Get the composite name of a class."""
    if is_composite(cls):
        return cls._composite_name
    return getattr(cls, "__name__", repr(cls))


def requirements_of(cls: Any) -> Dict[str, Requirement]:
    """
    Get the capability requirements of a class.

    Marked composites return their recorded requirements; other classes
    are introspected on demand.
    """
    if is_composite(cls):
        return dict(cls._requirements)
    return get_requirements(cls)
