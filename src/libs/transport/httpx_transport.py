"""httpx-backed HTTP transport."""

from __future__ import annotations

from typing import Mapping

import httpx

from src.core.errors import TransportError
from src.core.types import HttpResponse
from src.libs.transport.base_transport import BaseHttpTransport


class HttpxTransport(BaseHttpTransport):
    """Async transport built on ``httpx.AsyncClient``.

    A client may be injected (tests pass one wired to ``httpx.MockTransport``);
    otherwise a short-lived client is opened per request.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        *,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.timeout = float(timeout if timeout is not None else self.DEFAULT_TIMEOUT)
        self._client = client

    async def request(
        self,
        url: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> HttpResponse:
        try:
            if self._client is not None:
                response = await self._send(self._client, url, method, headers, body)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._send(client, url, method, headers, body)
        except httpx.TimeoutException as error:
            raise TransportError(f"Request timed out after {self.timeout:.0f} seconds") from error
        except httpx.ConnectError as error:
            raise TransportError(f"Connection failed: {error}") from error
        except httpx.RequestError as error:
            raise TransportError(f"Request failed: {error}") from error

        return HttpResponse(
            status=response.status_code,
            headers={key.lower(): value for key, value in response.headers.items()},
            text=response.text,
        )

    @staticmethod
    async def _send(
        client: httpx.AsyncClient,
        url: str,
        method: str,
        headers: Mapping[str, str] | None,
        body: str | None,
    ) -> httpx.Response:
        return await client.request(
            method.upper(),
            url,
            headers=dict(headers or {}),
            content=body,
        )
