from abc import ABC, abstractmethod

from ip_location.models.common import GeoRecord


class BaseGeoLookupClient(ABC):
    """Abstract base for IP geolocation clients.

    Implementations map a provider-specific response onto GeoRecord and raise
    LookupUnavailableError when the provider cannot answer.
    """

    @abstractmethod
    async def lookup_ip(self, ip: str) -> GeoRecord:
        """Look up geolocation information for an IP address."""
        raise NotImplementedError
