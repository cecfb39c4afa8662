"""Remote data fetcher.

Wraps an HTTP transport and turns responses into loader results by looking at
the ``content-type`` header. Every failure is reported as ``DataLoadError``
(``HttpError`` for non-2xx statuses) so callers handle a single error kind.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from src.core.errors import DataLoadError, HttpError
from src.core.types import HttpResponse
from src.libs.loader.formats import decode_content, format_for_content_type
from src.libs.transport.base_transport import BaseHttpTransport
from src.observability.logger import get_logger

logger = get_logger("fetcher")

_ERROR_PREFIX = "Failed to load data from API"


@dataclass(frozen=True)
class RequestOptions:
    """Fetch-style request options."""

    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None

    @classmethod
    def coerce(cls, options: "OptionsLike") -> "RequestOptions":
        if options is None:
            return cls()
        if isinstance(options, RequestOptions):
            return options
        if not isinstance(options, Mapping):
            raise TypeError("request options must be a mapping or RequestOptions")
        return cls(
            method=str(options.get("method") or "GET"),
            headers=dict(options.get("headers") or {}),
            body=options.get("body"),
        )

    def serialized_body(self) -> str | None:
        if self.body is None or isinstance(self.body, str):
            return self.body
        return json.dumps(self.body)


OptionsLike = Union[RequestOptions, Mapping[str, Any], None]


class RemoteFetcher:
    """Loads data from external APIs through a ``BaseHttpTransport``."""

    def __init__(self, transport: BaseHttpTransport, *, allow_external_apis: bool = True) -> None:
        self.transport = transport
        self.allow_external_apis = allow_external_apis

    async def request(self, url: str, options: OptionsLike = None) -> HttpResponse:
        """Issue exactly one request and return the raw response.

        The status code is not checked here.
        """

        if not self.allow_external_apis:
            raise DataLoadError(f"{_ERROR_PREFIX}: external APIs are disabled")

        try:
            opts = RequestOptions.coerce(options)
            logger.debug("%s %s", opts.method.upper(), url)
            return await self.transport.request(
                url,
                method=opts.method,
                headers=opts.headers,
                body=opts.serialized_body(),
            )
        except Exception as error:
            logger.warning("Request to %s failed: %s", url, error)
            raise DataLoadError(f"{_ERROR_PREFIX}: {error}") from error

    async def fetch(self, url: str, options: OptionsLike = None) -> Any:
        """Fetch ``url`` and decode the body according to its content type."""

        response = await self.request(url, options)

        if not response.ok:
            logger.warning("Request to %s returned HTTP %s", url, response.status)
            raise HttpError(
                response.status,
                f"{_ERROR_PREFIX}: HTTP error! status: {response.status}",
            )

        data_format = format_for_content_type(response.content_type)
        try:
            return decode_content(response.text, data_format)
        except Exception as error:
            raise DataLoadError(f"{_ERROR_PREFIX}: {error}") from error
