"""Composite domain - composites and their role specifications."""

from .composite import Composite, CompositionSpec
from .requirements import Requirement, get_requirements

__all__ = ["Composite", "CompositionSpec", "Requirement", "get_requirements"]
