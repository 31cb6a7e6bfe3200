"""OpenStreetMap Nominatim reverse-geocoding client.

Identifies whether an impact point lies on water and names the place.
Nominatim's usage policy requires an identifying User-Agent and at most
one request per second; results are cached per client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import requests

logger = logging.getLogger(__name__)

_WATER_KEYS = ("ocean", "sea", "bay", "body_of_water", "lake", "river")


@dataclass(frozen=True)
class PlaceInfo:
    """Reverse-geocoded description of a coordinate.

    Attributes:
        latitude: Queried latitude.
        longitude: Queried longitude.
        display_name: Full place label, if any.
        is_water: Whether the point is on a water body.
        water_body: ocean / sea / bay / lake / river when on water.
        country: Country name, if any.
        population_density: People/km², when the provider knows it.
    """

    latitude: float
    longitude: float
    display_name: str | None = None
    is_water: bool | None = None
    water_body: str | None = None
    country: str | None = None
    population_density: float | None = None


def parse_reverse_response(lat: float, lon: float, data: dict) -> PlaceInfo:
    """Build a PlaceInfo from a Nominatim ``/reverse`` JSON body."""
    address = data.get("address")
    if not address:
        # Nominatim returns no address for open water
        return PlaceInfo(latitude=lat, longitude=lon, is_water=True, water_body="ocean")

    water_body = next((key for key in _WATER_KEYS if address.get(key)), None)
    if water_body is None and data.get("type") in ("sea", "ocean"):
        water_body = data["type"]
    if water_body == "body_of_water":
        water_body = "ocean"

    return PlaceInfo(
        latitude=lat,
        longitude=lon,
        display_name=data.get("display_name"),
        is_water=water_body is not None,
        water_body=water_body,
        country=address.get("country"),
    )


@dataclass
class NominatimGeocoder:
    """Client for the Nominatim reverse-geocoding API.

    Attributes:
        user_agent: Identifying User-Agent, required by Nominatim.
        base_url: Service root.
        timeout: Per-request timeout in seconds.
        zoom: Reverse-geocoding detail level (10 = city).
    """

    user_agent: str = "neoimpact/0.1"
    base_url: str = "https://nominatim.openstreetmap.org"
    timeout: float = 10.0
    zoom: int = 10
    _session: requests.Session = field(default_factory=requests.Session, repr=False)
    _cache: dict = field(default_factory=dict, repr=False)

    def lookup(self, lat: float, lon: float) -> PlaceInfo:
        """Reverse-geocode a coordinate.

        Args:
            lat: Latitude in degrees.
            lon: Longitude in degrees.

        Returns:
            PlaceInfo for the point.

        Raises:
            requests.HTTPError: If the service returns an error status.
        """
        key = (round(lat, 4), round(lon, 4))
        if key in self._cache:
            return self._cache[key]

        response = self._session.get(
            f"{self.base_url}/reverse",
            params={"lat": lat, "lon": lon, "format": "json", "zoom": self.zoom},
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
        )
        response.raise_for_status()

        place = parse_reverse_response(lat, lon, response.json())
        logger.debug("Reverse geocoded (%.4f, %.4f): water=%s, %s", lat, lon, place.is_water, place.display_name)
        self._cache[key] = place
        return place
