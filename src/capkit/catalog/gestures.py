"""
Gesture capabilities.

Each gesture is its own single-method capability so a button only
requires the gestures it actually handles.
"""
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from capkit.catalog.reporting import Reporter
from capkit.domain.base.exceptions import ValidationError
from capkit.domain.capability import capability
from capkit.infrastructure.di.decorators import composite


@capability
class Tappable(ABC):
    @abstractmethod
    def did_tap(self) -> str:
        """Handle a single tap."""


@capability
class DoubleTappable(ABC):
    @abstractmethod
    def did_double_tap(self) -> str:
        """Handle a double tap."""


@capability
class LongPressable(ABC):
    @abstractmethod
    def did_long_press(self) -> str:
        """Handle a long press."""


class _GestureHandler:
    gesture = "gesture"

    def __init__(self, reporter: Optional[Reporter] = None):
        self.reporter = reporter

    def _handle(self) -> str:
        if self.reporter is not None:
            self.reporter.report("Gesture handled", gesture=self.gesture)
        return self.gesture


class TapHandler(_GestureHandler, Tappable):
    gesture = "tap"

    def did_tap(self) -> str:
        return self._handle()


class DoubleTapHandler(_GestureHandler, DoubleTappable):
    gesture = "double_tap"

    def did_double_tap(self) -> str:
        return self._handle()


class LongPressHandler(_GestureHandler, LongPressable):
    gesture = "long_press"

    def did_long_press(self) -> str:
        return self._handle()


class _Button(ABC):
    @abstractmethod
    def _handlers(self) -> Dict[str, Callable[[], str]]:
        """Map gesture names to their handlers."""

    @property
    def gestures(self) -> List[str]:
        return sorted(self._handlers())

    def handle(self, gesture: str) -> str:
        handlers = self._handlers()
        if gesture not in handlers:
            raise ValidationError(
                f"{type(self).__name__} does not handle '{gesture}'",
                details={"supported": sorted(handlers)},
            )
        return handlers[gesture]()


@composite
class SuperButton(_Button):
    def __init__(self, tap: Tappable, double_tap: DoubleTappable, long_press: LongPressable):
        self.tap = tap
        self.double_tap = double_tap
        self.long_press = long_press

    def _handlers(self) -> Dict[str, Callable[[], str]]:
        return {
            "tap": self.tap.did_tap,
            "double_tap": self.double_tap.did_double_tap,
            "long_press": self.long_press.did_long_press,
        }


@composite
class DoubleTapButton(_Button):
    def __init__(self, double_tap: DoubleTappable):
        self.double_tap = double_tap

    def _handlers(self) -> Dict[str, Callable[[], str]]:
        return {"double_tap": self.double_tap.did_double_tap}
