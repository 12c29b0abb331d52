"""Catalog of illustrative capabilities, implementations and composites."""

from .registration import CATALOG, register_catalog
from .scenarios import SCENARIOS

__all__ = ["CATALOG", "SCENARIOS", "register_catalog"]
