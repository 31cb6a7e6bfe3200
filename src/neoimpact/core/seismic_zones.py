"""Seismic zone classification.

Offline lookup against approximate tectonic boundary boxes, plus the
risk rules shared with the USGS history client. The boxes are coarse
illustrations of the major belts, not fault-trace geometry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from neoimpact.core.effects import earthquake_magnitude
from neoimpact.core.geography import Box

logger = logging.getLogger(__name__)


class SeismicRisk(Enum):
    VERY_HIGH = "VERY_HIGH"
    HIGH = "HIGH"
    MODERATE = "MODERATE"
    LOW = "LOW"


@dataclass(frozen=True)
class SeismicZone:
    """Seismic setting of an impact site.

    Attributes:
        zone_name: Tectonic region name.
        risk_level: Qualitative seismic risk.
        description: Short human-readable summary.
        tectonic_context: Plate-boundary setting.
        method: How the zone was determined.
        confidence: high / medium / low.
        events_per_year: Historical M3+ event rate, when known.
        max_historical_magnitude: Largest recorded magnitude, when known.
        tsunami_risk: NONE / LOW / MODERATE / HIGH / EXTREME, when known.
        magnitude_override: Replacement impact-quake magnitude, if any.
        secondary_hazards: Additional hazards to flag.
    """

    zone_name: str
    risk_level: SeismicRisk
    description: str
    tectonic_context: str
    method: str = "tectonic_boundaries"
    confidence: str = "medium"
    events_per_year: float | None = None
    max_historical_magnitude: float | None = None
    tsunami_risk: str | None = None
    magnitude_override: float | None = None
    secondary_hazards: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TectonicRegion:
    name: str
    boxes: tuple[Box, ...]
    risk_level: SeismicRisk
    context: str

    def contains(self, lat: float, lon: float) -> bool:
        return any(b.contains(lat, lon) for b in self.boxes)


# Specific fault systems are listed before the broad belts that enclose them.
TECTONIC_REGIONS: tuple[TectonicRegion, ...] = (
    TectonicRegion(
        "Japan Trench Subduction Zone",
        (Box(30, 45, 130, 145),),
        SeismicRisk.VERY_HIGH,
        "Pacific Plate subducting under Eurasian Plate. Extreme seismic activity.",
    ),
    TectonicRegion(
        "San Andreas Fault System",
        (Box(32, 40, -125, -115),),
        SeismicRisk.HIGH,
        "Major transform fault. High seismic risk. Historic major earthquakes.",
    ),
    TectonicRegion(
        "Anatolian Fault System",
        (Box(38, 42, 26, 44),),
        SeismicRisk.HIGH,
        "Major transform fault in Turkey. High seismic activity, historic M7+ events.",
    ),
    TectonicRegion(
        "Pacific Ring of Fire",
        (
            Box(30, 50, 120, 180),      # Japan / Kurils
            Box(5, 20, 120, 180),       # Philippines
            Box(-10, 5, 120, 180),      # Indonesia
            Box(-50, -30, 120, 180),    # New Zealand
            Box(-60, -10, -180, -65),   # Chile / Peru
            Box(-10, 20, -180, -65),    # Central America
            Box(30, 65, -180, -65),     # Alaska / Cascadia
            Box(50, 65, -180, -160),    # Aleutians
        ),
        SeismicRisk.VERY_HIGH,
        "Convergent plate boundaries, subduction zones. Highest seismic risk globally.",
    ),
    TectonicRegion(
        "Alpide Belt",
        (Box(30, 45, -10, 45), Box(25, 40, 45, 100)),
        SeismicRisk.HIGH,
        "Continental collision zones. Mediterranean to Himalayas. High seismic activity.",
    ),
    TectonicRegion(
        "Mid-Atlantic Ridge",
        (Box(-65, 65, -35, -10), Box(63, 67, -25, -13)),
        SeismicRisk.MODERATE,
        "Divergent plate boundary. Submarine spreading ridge. Moderate seismic activity.",
    ),
    TectonicRegion(
        "East African Rift",
        (Box(-15, 15, 28, 45),),
        SeismicRisk.MODERATE,
        "Continental rift zone. Active divergent boundary. Moderate seismic activity.",
    ),
)

STABLE_REGION = TectonicRegion(
    "Stable Continental Region",
    (),
    SeismicRisk.LOW,
    "Intraplate region. Low seismic activity. Rare but possible earthquakes.",
)


def identify_tectonic_region(lat: float, lon: float) -> TectonicRegion:
    for region in TECTONIC_REGIONS:
        if region.contains(lat, lon):
            return region
    return STABLE_REGION


def risk_from_history(events_per_year: float, max_magnitude: float) -> tuple[SeismicRisk, str]:
    """Risk level from historical event rate and peak magnitude."""
    if events_per_year > 50 or max_magnitude > 7.5:
        return SeismicRisk.VERY_HIGH, "Very high seismic activity zone. Major earthquakes common."
    if events_per_year > 20 or max_magnitude > 6.5:
        return SeismicRisk.HIGH, "High seismic activity zone. Significant earthquakes expected."
    if events_per_year > 5 or max_magnitude > 5.5:
        return SeismicRisk.MODERATE, "Moderate seismic activity. Occasional strong earthquakes."
    return SeismicRisk.LOW, "Low seismic activity. Infrequent earthquakes."


def tsunami_risk(is_ocean: bool, tsunami_events: int) -> str:
    """Tsunami risk from the count of past tsunami-generating quakes."""
    if not is_ocean:
        return "NONE"
    if tsunami_events > 5:
        return "EXTREME"
    if tsunami_events > 2:
        return "HIGH"
    if tsunami_events > 0:
        return "MODERATE"
    return "LOW"


def secondary_hazards(
    impact_magnitude: float,
    risk_level: SeismicRisk,
    crater_diameter_km: float,
    energy_j: float,
    tsunami: str | None = None,
) -> tuple[str, ...]:
    hazards = []
    if impact_magnitude > 5.0:
        hazards.append("Major seismic shaking")
    if tsunami in ("HIGH", "EXTREME"):
        hazards.append("Tsunami waves")
    if risk_level in (SeismicRisk.HIGH, SeismicRisk.VERY_HIGH):
        hazards.append("Potential fault activation")
    if crater_diameter_km > 1.0:
        hazards.append("Ejecta blanket")
    if energy_j > 1e18:
        hazards.append("Atmospheric disturbance")
    return tuple(hazards)


class TectonicZoneLookup:
    """Offline seismic zone provider using the tectonic boundary table."""

    def classify(
        self,
        lat: float,
        lon: float,
        energy_j: float,
        crater_diameter_km: float,
    ) -> SeismicZone:
        region = identify_tectonic_region(lat, lon)
        magnitude = earthquake_magnitude(energy_j)
        logger.debug("Tectonic zone at (%.2f, %.2f): %s", lat, lon, region.name)
        return SeismicZone(
            zone_name=region.name,
            risk_level=region.risk_level,
            description=f"Tectonic zone: {region.name}",
            tectonic_context=region.context,
            method="tectonic_boundaries",
            confidence="medium",
            secondary_hazards=secondary_hazards(magnitude, region.risk_level, crater_diameter_km, energy_j),
        )
