import math
from typing import Any

from pydantic import BaseModel, field_validator

UNKNOWN = "未知"


class GeoRecord(BaseModel):
    """Geolocation of a single IP address as shown on the location page.

    Every field is always populated: unresolved strings hold the UNKNOWN
    sentinel and unresolved coordinates are 0.0.
    """

    ip: str
    country: str = UNKNOWN
    region: str = UNKNOWN
    city: str = UNKNOWN
    latitude: float = 0.0
    longitude: float = 0.0

    @field_validator("country", "region", "city", mode="before")
    @classmethod
    def _default_blank_text(cls, value: Any) -> str:
        """Keep non-empty strings verbatim; anything else becomes UNKNOWN."""
        if isinstance(value, str) and value:
            return value
        return UNKNOWN

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_lat_lon(cls, value: Any) -> float:
        """Allow latitude/longitude to be provided as strings or numbers.

        Missing, boolean, non-numeric or non-finite values fall back to 0.0.
        """
        if value is None or isinstance(value, bool):
            return 0.0
        try:
            # For general GPS and mapping, 5-6 decimal places (e.g., 34.052235)
            coordinate = round(float(value), 6)
        except (TypeError, ValueError, OverflowError):
            return 0.0
        if not math.isfinite(coordinate):
            return 0.0
        return coordinate

    @classmethod
    def unknown(cls, ip: str) -> "GeoRecord":
        """All-defaults record that still echoes the queried IP."""
        return cls(ip=ip)


class LookupResult(BaseModel):
    """Outcome of a geolocation lookup.

    `record` is always usable. When `succeeded` is False the record holds the
    defaults and `error` carries the reason the upstream lookup failed.
    """

    record: GeoRecord
    succeeded: bool = True
    error: str | None = None

    @property
    def degraded(self) -> bool:
        return not self.succeeded
