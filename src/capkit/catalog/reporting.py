"""Reporting capability - how strategies tell the outside world what they did."""
import sys
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TextIO, Tuple

import structlog

from capkit.domain.capability import capability


@capability
class Reporter(ABC):
    """Reports an action with structured fields."""

    @abstractmethod
    def report(self, message: str, **fields: Any) -> None:
        """Report a message."""


class ConsoleReporter(Reporter):
    """Writes one line per report to a stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def report(self, message: str, **fields: Any) -> None:
        details = " ".join(f"{key}={value}" for key, value in fields.items())
        line = f"{message} {details}".rstrip()
        print(line, file=self.stream or sys.stdout)


class StructuredReporter(Reporter):
    """Emits reports as structlog events."""

    def __init__(self, logger_name: str = "capkit.catalog"):
        self.logger_name = logger_name
        self._logger = structlog.get_logger(logger_name)

    def report(self, message: str, **fields: Any) -> None:
        self._logger.info(message, **fields)


class RecordingReporter(Reporter):
    """Keeps every report in memory, in order."""

    def __init__(self):
        self.entries: List[Tuple[str, Dict[str, Any]]] = []

    def report(self, message: str, **fields: Any) -> None:
        self.entries.append((message, dict(fields)))
