"""Constructor introspection - which capabilities a callable requires."""
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Union, get_args, get_origin, get_type_hints

from capkit.domain.capability.capability import get_capability, is_capability_interface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Requirement:
    """A constructor parameter that must be filled with a capability instance."""
    role: str
    capability: str
    optional: bool = False
    has_default: bool = False


def _is_optional_type(annotation: Any) -> bool:
    """Check if a type annotation represents Optional[T]."""
    origin = get_origin(annotation)
    if origin is Union:
        args = get_args(annotation)
        # Optional[T] is Union[T, None]
        return len(args) == 2 and type(None) in args
    return False


def _extract_optional_inner_type(annotation: Any) -> Any:
    """Extract T from Optional[T]."""
    args = get_args(annotation)
    return next(arg for arg in args if arg is not type(None))


def _type_hints(target: Callable[..., Any]) -> Dict[str, Any]:
    init = target.__init__ if isinstance(target, type) else target
    try:
        return get_type_hints(init)
    except Exception as e:
        name = getattr(target, "__name__", repr(target))
        logger.warning(f"Could not get type hints for {name}: {e}")
        return {}


def get_requirements(target: Callable[..., Any]) -> Dict[str, Requirement]:
    """
    Get the capability requirements of a class or factory function.

    A parameter is a requirement when it is annotated with a ``@capability``
    interface. It is optional when annotated ``Optional[...]`` or when it
    has a default value.

    Args:
        target: Class or callable to inspect

    Returns:
        Requirements keyed by parameter name, in signature order
    """
    try:
        signature = inspect.signature(target)
    except (TypeError, ValueError):
        return {}

    hints = _type_hints(target)
    requirements: Dict[str, Requirement] = {}

    for param_name, param in signature.parameters.items():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        annotation = hints.get(param_name, param.annotation)
        has_default = param.default is not inspect.Parameter.empty
        optional = has_default

        if _is_optional_type(annotation):
            annotation = _extract_optional_inner_type(annotation)
            optional = True

        if is_capability_interface(annotation):
            requirements[param_name] = Requirement(
                role=param_name,
                capability=get_capability(annotation).name,
                optional=optional,
                has_default=has_default,
            )

    return requirements

