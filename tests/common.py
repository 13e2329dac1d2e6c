from collections.abc import Callable
from typing import Any

import httpx

from ip_location.clients.base import BaseGeoLookupClient
from ip_location.errors import LookupUnavailableError
from ip_location.models.common import GeoRecord


class MockResponse:
    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = {} if payload is None else payload
        self.text = text

    def json(self) -> Any:
        return self._payload


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient.

    Remembers the constructor kwargs and requested URLs so tests can assert
    on what would have been sent.
    """

    def __init__(self, response: MockResponse, **kwargs: Any) -> None:
        self._response = response
        self.kwargs = kwargs
        self.requested_urls: list[str] = []

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str) -> MockResponse:
        self.requested_urls.append(url)
        return self._response


class FailingAsyncClient:
    """Async client whose GET raises an httpx transport error.

    The error class defaults to a plain RequestError; pass e.g.
    httpx.ConnectTimeout to simulate an expired timeout.
    """

    def __init__(self, url: str, error_cls: type[httpx.RequestError] = httpx.RequestError, **kwargs: Any) -> None:
        self._url = url
        self._error_cls = error_cls

    async def __aenter__(self) -> "FailingAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str) -> MockResponse:
        request = httpx.Request("GET", self._url)
        raise self._error_cls("Network failure", request=request)


def make_fake_async_client(
    response: MockResponse,
    created: list[MockAsyncClient] | None = None,
) -> Callable[..., MockAsyncClient]:
    """Factory for a fake httpx.AsyncClient returning a fixed response.

    Every created client is appended to `created` when it is given.
    """

    def _fake_client(*args: Any, **kwargs: Any) -> MockAsyncClient:
        client = MockAsyncClient(response, **kwargs)
        if created is not None:
            created.append(client)
        return client

    return _fake_client


class StaticLookupClient(BaseGeoLookupClient):
    """Lookup client double returning a fixed record and recording queried IPs."""

    def __init__(self, record: GeoRecord | None = None) -> None:
        self._record = record
        self.queried_ips: list[str] = []

    async def lookup_ip(self, ip: str) -> GeoRecord:
        self.queried_ips.append(ip)
        if self._record is None:
            return GeoRecord.unknown(ip)
        return self._record


class UnavailableLookupClient(BaseGeoLookupClient):
    """Lookup client double that always fails like an unreachable upstream."""

    def __init__(self, message: str = "Request to IP provider failed: timed out") -> None:
        self._message = message
        self.queried_ips: list[str] = []

    async def lookup_ip(self, ip: str) -> GeoRecord:
        self.queried_ips.append(ip)
        raise LookupUnavailableError(self._message)


UPSTREAM_OK_PAYLOAD = {
    "ip": "1.2.3.4",
    "country": "Testland",
    "regionName": "West",
    "city": "Sampleton",
    "lat": 10.5,
    "lon": -20.25,
}
