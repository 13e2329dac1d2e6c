from http import HTTPStatus
from typing import Any

import httpx

from ip_location.clients.base import BaseGeoLookupClient
from ip_location.errors import LookupUnavailableError
from ip_location.models.common import GeoRecord

IP_API_FIELDS = "ip,country,regionName,city,lat,lon"


class IpApiCom(BaseGeoLookupClient):
    """Client for the http://ip-api.com JSON API.

    Only the fields rendered on the location page are requested. The IP is
    forwarded to the provider as-is, without any format validation.
    """

    def __init__(self, base_url: str = "http://ip-api.com", timeout_seconds: float = 5.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def build_url(self, ip: str) -> str:
        return f"{self._base_url}/json/{ip}?fields={IP_API_FIELDS}"

    async def lookup_ip(self, ip: str) -> GeoRecord:
        """Look up geolocation information for an IP address."""
        url = self.build_url(ip)
        try:
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                response = await client.get(url)
        except httpx.RequestError as exc:
            # TimeoutException is a RequestError subclass.
            raise LookupUnavailableError(f"Request to IP provider failed: {repr(exc)}") from exc
        except httpx.InvalidURL as exc:
            # The IP is not validated, so it can make the URL unbuildable (e.g. control characters).
            raise LookupUnavailableError(f"Could not build IP provider URL for {ip!r}: {exc}") from exc

        if response.status_code != HTTPStatus.OK:
            raise LookupUnavailableError(f"IP provider returned HTTP {response.status_code}: {response.text}")

        data = self._parse_json(response)
        return self._normalize_payload(ip, data)

    @staticmethod
    def _parse_json(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise LookupUnavailableError(f"Failed to decode IP provider response as JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise LookupUnavailableError(f"IP provider returned a non-object JSON body: {type(data).__name__}")
        return data

    @staticmethod
    def _normalize_payload(ip: str, data: dict[str, Any]) -> GeoRecord:
        """Map ip-api.com's response into GeoRecord.

        Blank or malformed values are replaced with defaults by the GeoRecord
        validators.
        """
        reported_ip = data.get("ip")
        return GeoRecord(
            ip=reported_ip if isinstance(reported_ip, str) and reported_ip else ip,
            country=data.get("country"),
            region=data.get("regionName"),
            city=data.get("city"),
            latitude=data.get("lat"),
            longitude=data.get("lon"),
        )
