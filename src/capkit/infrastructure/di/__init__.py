"""Dependency Injection package."""
from .composer import Composer
from .decorators import composite, composite_name, is_composite, requirements_of

__all__ = [
    "Composer",
    "composite",
    "composite_name",
    "is_composite",
    "requirements_of",
]
