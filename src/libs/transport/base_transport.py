"""Base HTTP transport contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping

from src.core.types import HttpResponse


class BaseHttpTransport(ABC):
    """Issues a single HTTP request and returns the raw response.

    Implementations must not raise on non-2xx statuses; status handling
    belongs to the caller. Connection-level failures raise ``TransportError``.
    """

    @abstractmethod
    async def request(
        self,
        url: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> HttpResponse:
        """Send one request."""
