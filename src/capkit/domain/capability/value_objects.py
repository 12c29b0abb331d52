"""Capability value objects - registration policy and instance lifetime."""
from enum import Enum


class RegistrationPolicy(str, Enum):
    """How a registry treats a second registration for the same capability."""
    STRICT = "strict"
    LAST_WINS = "last_wins"


class Lifetime(str, Enum):
    """How long a resolved implementation instance lives."""
    TRANSIENT = "transient"
    SINGLETON = "singleton"
