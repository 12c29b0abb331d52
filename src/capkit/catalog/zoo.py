"""
Zoo capabilities.

Cages and animals are composed from small capabilities instead of deep
class hierarchies: a penguin is an Animal with a Swimming movement, so no
bird is ever asked to fly.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict

from capkit.domain.capability import capability
from capkit.infrastructure.di.decorators import composite


@capability
class Door(ABC):
    @abstractmethod
    def open(self) -> str:
        """Open the door and describe it."""


@capability
class Bowl(ABC):
    @abstractmethod
    def serve(self) -> str:
        """Serve food and describe it."""


@capability
class Movement(ABC):
    @abstractmethod
    def move(self) -> str:
        """Describe how the animal moves."""


class WoodenDoor(Door):
    def open(self) -> str:
        return "wooden door creaks open"


class IronDoor(Door):
    def __init__(self, bars: int = 12):
        self.bars = bars

    def open(self) -> str:
        return f"iron door with {self.bars} bars swings open"


class FruitBowl(Bowl):
    def __init__(self, fruit: str = "apples"):
        self.fruit = fruit

    def serve(self) -> str:
        return f"bowl of {self.fruit}"


class MeatBowl(Bowl):
    def serve(self) -> str:
        return "bowl of meat"


class Walking(Movement):
    def move(self) -> str:
        return "walks"


class Flying(Movement):
    def move(self) -> str:
        return "flies"


class Swimming(Movement):
    def move(self) -> str:
        return "swims"


@composite
class Cage:
    """A cage owns its door and bowl; nothing is shared between cages."""

    def __init__(self, door: Door, bowl: Bowl, label: str = "cage"):
        self.door = door
        self.bowl = bowl
        self.label = label

    def feed(self) -> str:
        return f"{self.label}: {self.door.open()}, serving {self.bowl.serve()}"

    def describe(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "door": type(self.door).__name__,
            "bowl": type(self.bowl).__name__,
        }


@composite
class Animal:
    def __init__(self, movement: Movement, name: str = "animal"):
        self.movement = movement
        self.name = name

    def move(self) -> str:
        return f"{self.name} {self.movement.move()}"
