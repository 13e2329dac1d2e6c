from ip_location.clients.base import BaseGeoLookupClient
from ip_location.errors import LookupUnavailableError
from ip_location.logger import logger
from ip_location.models.common import GeoRecord, LookupResult


class GeoLocator:
    """Resolves IP addresses to GeoRecords without ever failing outward.

    Upstream failures are logged and replaced with the all-defaults record;
    `resolve` reports whether that substitution happened.
    """

    def __init__(self, client: BaseGeoLookupClient) -> None:
        self._client = client

    async def resolve(self, ip: str) -> LookupResult:
        try:
            record = await self._client.lookup_ip(ip)
        except LookupUnavailableError as exc:
            logger.warning(f"Geolocation lookup failed, using defaults ip={ip} error={exc}")
            return LookupResult(record=GeoRecord.unknown(ip), succeeded=False, error=str(exc))
        return LookupResult(record=record)

    async def lookup(self, ip: str) -> GeoRecord:
        """Return the GeoRecord for `ip`, populated with defaults on failure."""
        result = await self.resolve(ip)
        return result.record
