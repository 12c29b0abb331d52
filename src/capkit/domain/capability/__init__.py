"""Capability domain - contracts, registrations and policies."""

from .capability import (
    Capability,
    CapabilityKey,
    CapabilityView,
    as_capability,
    as_capability_name,
    capability,
    get_capability,
    is_capability_interface,
    unwrap,
)
from .registration import Registration
from .value_objects import Lifetime, RegistrationPolicy

__all__ = [
    "Capability",
    "CapabilityKey",
    "CapabilityView",
    "Lifetime",
    "Registration",
    "RegistrationPolicy",
    "as_capability",
    "as_capability_name",
    "capability",
    "get_capability",
    "is_capability_interface",
    "unwrap",
]
