"""Coarse geographic location resolved from an IP address."""

from dataclasses import dataclass

from parcel_portal.core.constants import LOCAL_COUNTRY, UNKNOWN_VALUE


@dataclass(frozen=True, slots=True)
class Coordinates:
    """Latitude/longitude pair."""

    lat: float
    lng: float

    def __str__(self) -> str:
        """Point literal as stored in `access_logs.location_coords`."""
        return f"({self.lat},{self.lng})"


@dataclass(frozen=True, slots=True, kw_only=True)
class GeoLocation:
    """Location of a client IP.

    Attributes:
        country: Country name, "Local/Development" or "Unknown".
        region: State/province, if resolved.
        city: City, if resolved.
        coords: Coordinates, if both latitude and longitude were resolved.
    """

    country: str | None = None
    region: str | None = None
    city: str | None = None
    coords: Coordinates | None = None

    @classmethod
    def local(cls) -> "GeoLocation":
        """Location recorded for loopback, private and sentinel addresses."""
        return cls(country=LOCAL_COUNTRY)

    @classmethod
    def unknown(cls) -> "GeoLocation":
        """Location recorded when the lookup failed."""
        return cls(country=UNKNOWN_VALUE)
