"""Unit tests for the remote fetcher.

The HTTP transport is replaced by an in-memory fake so no network is needed.
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

import pytest

from src.core.errors import DataLoadError, HttpError, ParseError, TransportError
from src.core.types import HttpResponse
from src.libs.loader.remote_fetcher import RemoteFetcher, RequestOptions
from src.libs.transport.base_transport import BaseHttpTransport


# -----------------------------------------------------------------------------
# Test Fixtures
# -----------------------------------------------------------------------------


class FakeTransport(BaseHttpTransport):
    """Records requests and answers with a canned response or error."""

    def __init__(self, response: HttpResponse | None = None, error: Exception | None = None):
        self.response = response or HttpResponse(status=200)
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def request(
        self,
        url: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> HttpResponse:
        self.calls.append({"url": url, "method": method, "headers": dict(headers or {}), "body": body})
        if self.error is not None:
            raise self.error
        return self.response


def make_response(status: int = 200, content_type: str | None = None, text: str = "") -> HttpResponse:
    headers = {"content-type": content_type} if content_type else {}
    return HttpResponse(status=status, headers=headers, text=text)


# -----------------------------------------------------------------------------
# fetch()
# -----------------------------------------------------------------------------


@pytest.mark.unit
class TestFetch:
    """Test fetch decoding and error handling."""

    def test_json_response_is_decoded(self) -> None:
        """Test decoding a JSON response."""
        transport = FakeTransport(make_response(content_type="application/json", text='{"x":1}'))
        result = asyncio.run(RemoteFetcher(transport).fetch("https://example.test/data"))
        assert result == {"x": 1}

    def test_csv_response_is_parsed(self) -> None:
        """Test parsing a CSV response."""
        transport = FakeTransport(make_response(content_type="text/csv; charset=utf-8", text="a,b\n1,x"))
        result = asyncio.run(RemoteFetcher(transport).fetch("https://example.test/data.csv"))
        assert result == [{"a": 1, "b": "x"}]

    def test_other_content_is_returned_verbatim(self) -> None:
        """Test that other content types return text."""
        transport = FakeTransport(make_response(content_type="text/plain", text="hello\n"))
        assert asyncio.run(RemoteFetcher(transport).fetch("https://example.test")) == "hello\n"

    def test_missing_content_type_returns_text(self) -> None:
        """Test a response without content type."""
        transport = FakeTransport(make_response(text='{"x":1}'))
        assert asyncio.run(RemoteFetcher(transport).fetch("https://example.test")) == '{"x":1}'

    def test_404_raises_http_error(self) -> None:
        """Test that 404 raises HttpError."""
        transport = FakeTransport(make_response(status=404, text="missing"))
        with pytest.raises(HttpError) as exc_info:
            asyncio.run(RemoteFetcher(transport).fetch("https://example.test/missing"))
        assert exc_info.value.status == 404
        assert "status: 404" in str(exc_info.value)

    @pytest.mark.parametrize("status", [199, 300, 302, 500])
    def test_status_outside_2xx_is_rejected(self, status: int) -> None:
        """Test that non-2xx statuses are rejected."""
        transport = FakeTransport(make_response(status=status))
        with pytest.raises(HttpError):
            asyncio.run(RemoteFetcher(transport).fetch("https://example.test"))

    def test_http_error_is_a_data_load_error(self) -> None:
        """Test that HttpError is a DataLoadError."""
        transport = FakeTransport(make_response(status=500))
        with pytest.raises(DataLoadError):
            asyncio.run(RemoteFetcher(transport).fetch("https://example.test"))

    def test_transport_failure_is_wrapped(self) -> None:
        """Test that transport errors become DataLoadError."""
        transport = FakeTransport(error=TransportError("Connection failed: refused"))
        with pytest.raises(DataLoadError) as exc_info:
            asyncio.run(RemoteFetcher(transport).fetch("https://example.test"))
        assert "Failed to load data from API" in str(exc_info.value)
        assert "Connection failed" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, TransportError)

    def test_invalid_json_body_is_wrapped(self) -> None:
        """Test that undecodable bodies become DataLoadError."""
        transport = FakeTransport(make_response(content_type="application/json", text="{oops"))
        with pytest.raises(DataLoadError) as exc_info:
            asyncio.run(RemoteFetcher(transport).fetch("https://example.test"))
        assert isinstance(exc_info.value.__cause__, ParseError)

    def test_exactly_one_request_is_sent(self) -> None:
        """Test that fetch sends a single request."""
        transport = FakeTransport(make_response(status=500))
        with pytest.raises(HttpError):
            asyncio.run(RemoteFetcher(transport).fetch("https://example.test"))
        assert len(transport.calls) == 1

    def test_disabled_external_apis(self) -> None:
        """Test that disabled APIs send nothing."""
        transport = FakeTransport(make_response(content_type="application/json", text="[]"))
        fetcher = RemoteFetcher(transport, allow_external_apis=False)
        with pytest.raises(DataLoadError, match="disabled"):
            asyncio.run(fetcher.fetch("https://example.test"))
        assert transport.calls == []


# -----------------------------------------------------------------------------
# request() and options
# -----------------------------------------------------------------------------


@pytest.mark.unit
class TestRequestOptions:
    """Test request options handling."""

    def test_defaults_to_get(self) -> None:
        """Test that requests default to GET."""
        transport = FakeTransport()
        asyncio.run(RemoteFetcher(transport).request("https://example.test"))
        assert transport.calls[0]["method"] == "GET"
        assert transport.calls[0]["body"] is None

    def test_mapping_options_are_forwarded(self) -> None:
        """Test that mapping options reach the transport."""
        transport = FakeTransport()
        options = {"method": "POST", "headers": {"X-Token": "t"}, "body": "raw"}
        asyncio.run(RemoteFetcher(transport).request("https://example.test", options))
        call = transport.calls[0]
        assert call["method"] == "POST"
        assert call["headers"] == {"X-Token": "t"}
        assert call["body"] == "raw"

    def test_non_string_body_is_serialized(self) -> None:
        """Test JSON serialization of non-string bodies."""
        transport = FakeTransport()
        options = RequestOptions(method="POST", body={"q": [1, 2]})
        asyncio.run(RemoteFetcher(transport).request("https://example.test", options))
        assert transport.calls[0]["body"] == '{"q": [1, 2]}'

    def test_request_does_not_check_status(self) -> None:
        """Test that request returns error statuses."""
        transport = FakeTransport(make_response(status=503, text="busy"))
        response = asyncio.run(RemoteFetcher(transport).request("https://example.test"))
        assert response.status == 503
        assert response.ok is False

    def test_invalid_options_are_wrapped(self) -> None:
        """Test that bad options become DataLoadError."""
        transport = FakeTransport()
        with pytest.raises(DataLoadError):
            asyncio.run(RemoteFetcher(transport).request("https://example.test", ["GET"]))
        assert transport.calls == []
