"""Asynchronous data fetching capability with a mock implementation."""
import asyncio
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional

from capkit.catalog.reporting import Reporter
from capkit.domain.base.exceptions import DomainException
from capkit.domain.capability import capability
from capkit.infrastructure.di.decorators import composite


class APIErrorKind(str, Enum):
    INVALID_URL = "invalid_url"
    INVALID_RESPONSE = "invalid_response"
    INVALID_STATUS_CODE = "invalid_status_code"


class APIError(DomainException):
    """Raised when fetching data fails."""

    def __init__(self, kind: APIErrorKind):
        super().__init__(f"API request failed: {kind.value}")
        self.kind = kind


@capability
class DataFetcher(ABC):
    @abstractmethod
    async def fetch_data(self) -> Dict[str, Any]:
        """Fetch data."""


class MockAPI(DataFetcher):
    """Returns a fixed payload, or fails with a configured error."""

    def __init__(self, payload: Optional[Dict[str, Any]] = None, error: Optional[str] = None,
                 delay: float = 0.0):
        self.payload = dict(payload or {})
        self.error = APIErrorKind(error) if error else None
        self.delay = delay

    async def fetch_data(self) -> Dict[str, Any]:
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise APIError(self.error)
        return dict(self.payload)


@composite
class DataService:
    """Loads data, reporting failures instead of raising them."""

    def __init__(self, fetcher: DataFetcher, reporter: Reporter):
        self.fetcher = fetcher
        self.reporter = reporter

    async def load(self) -> Optional[Dict[str, Any]]:
        try:
            return await self.fetcher.fetch_data()
        except APIError as e:
            self.reporter.report("Error", error=e.kind.value)
            return None
