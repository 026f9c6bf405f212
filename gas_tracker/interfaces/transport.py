"""Fee transport protocol: one attempt against one endpoint."""
from typing import Protocol

from ..config import EndpointConfig
from ..models import FeeReading


class FeeTransport(Protocol):
    """Abstract interface for fetching fee metrics from a single endpoint."""

    async def attempt(self, endpoint: EndpointConfig) -> FeeReading: ...
