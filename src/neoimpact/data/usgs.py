"""USGS earthquake catalog client.

Queries the FDSN event web service for the historical seismicity around
an impact site and turns it into a :class:`SeismicZone`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import requests

from neoimpact.core.effects import earthquake_magnitude
from neoimpact.core.geography import find_ocean
from neoimpact.core.seismic_zones import (
    SeismicZone,
    identify_tectonic_region,
    risk_from_history,
    secondary_hazards,
    tsunami_risk,
)

logger = logging.getLogger(__name__)


@dataclass
class USGSSeismicClient:
    """Client for the USGS FDSN event service.

    Attributes:
        radius_km: Search radius around the site.
        years: Length of the historical window.
        min_magnitude: Smallest event magnitude to include.
        limit: Maximum number of events returned.
        timeout: Per-request timeout in seconds.
        now: Fixed end of the window; defaults to the current time.
    """

    radius_km: float = 500.0
    years: int = 10
    min_magnitude: float = 3.0
    limit: int = 1000
    timeout: float = 10.0
    now: datetime | None = None
    _session: requests.Session = field(default_factory=requests.Session, repr=False)

    BASE_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"

    def fetch_events(self, lat: float, lon: float) -> list[dict]:
        """Fetch GeoJSON earthquake features around a point.

        Args:
            lat: Latitude in degrees.
            lon: Longitude in degrees.

        Returns:
            List of GeoJSON feature dicts.

        Raises:
            requests.HTTPError: If the request fails.
            ValueError: If the response is not a GeoJSON feature collection.
        """
        end = self.now or datetime.now(timezone.utc)
        start = end - timedelta(days=365.25 * self.years)
        params = {
            "format": "geojson",
            "orderby": "time",
            "latitude": lat,
            "longitude": lon,
            "maxradiuskm": self.radius_km,
            "starttime": start.strftime("%Y-%m-%d"),
            "minmagnitude": self.min_magnitude,
            "limit": self.limit,
        }
        response = self._session.get(self.BASE_URL, params=params, timeout=self.timeout)
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict) or "features" not in data:
            logger.error("Unexpected USGS response for (%.2f, %.2f)", lat, lon)
            raise ValueError("USGS response has no 'features' collection")

        features = data["features"] or []
        logger.debug("Fetched %d USGS events within %.0f km of (%.2f, %.2f)", len(features), self.radius_km, lat, lon)
        return features

    def classify(
        self,
        lat: float,
        lon: float,
        energy_j: float,
        crater_diameter_km: float,
    ) -> SeismicZone:
        """Seismic zone from recorded seismicity near the site.

        Args:
            lat: Impact latitude.
            lon: Impact longitude.
            energy_j: Impact energy in joules.
            crater_diameter_km: Final crater diameter.

        Returns:
            SeismicZone with historical statistics. The impact magnitude only
            feeds the secondary hazards; no magnitude override is set.
        """
        events = self.fetch_events(lat, lon)
        magnitudes = [(e.get("properties") or {}).get("mag") or 0.0 for e in events]
        tsunami_events = sum(1 for e in events if (e.get("properties") or {}).get("tsunami") == 1)

        events_per_year = len(events) / self.years
        max_magnitude = max(magnitudes, default=0.0)
        risk, description = risk_from_history(events_per_year, max_magnitude)

        region = identify_tectonic_region(lat, lon)
        tsunami = tsunami_risk(find_ocean(lat, lon) is not None, tsunami_events)
        magnitude = earthquake_magnitude(energy_j)

        return SeismicZone(
            zone_name=region.name,
            risk_level=risk,
            description=description,
            tectonic_context=region.context,
            method="earthquake_density",
            confidence="high",
            events_per_year=events_per_year,
            max_historical_magnitude=max_magnitude,
            tsunami_risk=tsunami,
            secondary_hazards=secondary_hazards(magnitude, risk, crater_diameter_km, energy_j, tsunami),
        )
