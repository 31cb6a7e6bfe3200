"""Geographic heuristics for impact sites.

Terrain classification, population density, elevation and nearest-city
lookups used by the trajectory predictor. Every table here is a coarse
bounding-box approximation kept for educational visualisation; none of
it is census or survey data. Override any table through
:class:`GeographyConfig`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from neoimpact.utils.constants import EARTH_RADIUS_KM

logger = logging.getLogger(__name__)


class Terrain(Enum):
    """Surface class at the impact point."""

    OCEAN = "ocean"
    LAND = "land"
    CITY = "city"
    MOUNTAIN = "mountain"
    DESERT = "desert"


@dataclass(frozen=True)
class Box:
    """Latitude/longitude bounding box in degrees, bounds inclusive."""

    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.lat_min <= lat <= self.lat_max and self.lon_min <= lon <= self.lon_max


@dataclass(frozen=True)
class OceanRegion:
    """A named body of water: one or more boxes minus land exclusions."""

    name: str
    boxes: tuple[Box, ...]
    exclusions: tuple[Box, ...] = ()
    water_body: str = "ocean"

    def contains(self, lat: float, lon: float) -> bool:
        if not any(b.contains(lat, lon) for b in self.boxes):
            return False
        return not any(x.contains(lat, lon) for x in self.exclusions)


@dataclass(frozen=True)
class WeightedRegion:
    """A named box carrying a multiplier (population density factor)."""

    name: str
    box: Box
    factor: float


@dataclass(frozen=True)
class City:
    name: str
    latitude: float
    longitude: float


# Illustrative ocean and sea extents. Checked in order; first match wins.
OCEAN_REGIONS: tuple[OceanRegion, ...] = (
    OceanRegion(
        "Pacific Ocean",
        boxes=(Box(-60, 60, -180, -70), Box(-60, 60, 120, 180)),
        exclusions=(
            Box(10, 60, -120, -70),     # North America
            Box(-60, 10, -82, -70),     # South America
            Box(20, 50, 120, 150),      # Japan / China
            Box(-50, -10, 140, 180),    # Australia / New Zealand
        ),
    ),
    OceanRegion(
        "Atlantic Ocean",
        boxes=(Box(-60, 70, -70, 20),),
        exclusions=(
            Box(-35, 12, -70, -35),     # South America
            Box(35, 70, -10, 20),       # Europe
            Box(-35, 35, -10, 20),      # Africa
        ),
    ),
    OceanRegion(
        "Indian Ocean",
        boxes=(Box(-60, 30, 20, 120),),
        exclusions=(
            Box(-35, 30, 20, 50),       # Africa
            Box(10, 30, 70, 100),       # South Asia
            Box(-40, -10, 110, 120),    # Western Australia
        ),
    ),
    OceanRegion("Southern Ocean", boxes=(Box(-90, -60, -180, 180),)),
    OceanRegion(
        "Arctic Ocean",
        boxes=(Box(70, 90, -180, 180),),
        exclusions=(
            Box(70, 85, -50, -20),      # Greenland
            Box(70, 80, 20, 100),       # Northern Russia / Scandinavia
        ),
    ),
    OceanRegion("Mediterranean Sea", boxes=(Box(30, 46, -6, 36),), water_body="sea"),
    OceanRegion("Caribbean Sea", boxes=(Box(10, 25, -88, -60),), water_body="sea"),
    OceanRegion("Red Sea", boxes=(Box(12, 30, 32, 43),), water_body="sea"),
    OceanRegion("Gulf of Mexico", boxes=(Box(18, 30, -97, -81),), water_body="gulf"),
)

# Illustrative continental extents. A point in none of these and in no
# ocean region falls back to the global ocean/land split.
CONTINENTAL_REGIONS: tuple[WeightedRegion, ...] = (
    WeightedRegion("North America", Box(15, 72, -170, -52), 1.0),
    WeightedRegion("Central America", Box(7, 15, -93, -77), 1.0),
    WeightedRegion("South America", Box(-56, 13, -82, -34), 1.0),
    WeightedRegion("Greenland", Box(59, 84, -73, -11), 1.0),
    WeightedRegion("Europe", Box(35, 72, -10, 40), 1.0),
    WeightedRegion("Africa", Box(-35, 37, -18, 52), 1.0),
    WeightedRegion("Asia", Box(5, 78, 40, 180), 1.0),
    WeightedRegion("Australia", Box(-44, -10, 112, 154), 1.0),
)

# Population multipliers on top of the latitude falloff. Later entries
# override earlier ones where boxes overlap.
DENSITY_REGIONS: tuple[WeightedRegion, ...] = (
    WeightedRegion("North America", Box(25, 50, -130, -60), 2.0),
    WeightedRegion("Asia", Box(10, 50, 70, 140), 3.0),
    WeightedRegion("Europe", Box(35, 70, -10, 40), 2.0),
)

DESERT_BELTS: tuple[Box, ...] = (
    Box(-30, 30, -20, 50),      # Sahara / Arabia / Kalahari
    Box(-30, 30, -120, -90),    # Sonoran / Chihuahuan
)

MAJOR_CITIES: tuple[City, ...] = (
    City("Tokyo", 35.6762, 139.6503),
    City("New York", 40.7128, -74.006),
    City("London", 51.5074, -0.1278),
    City("Beijing", 39.9042, 116.4074),
    City("Mumbai", 19.076, 72.8777),
    City("São Paulo", -23.5505, -46.6333),
    City("Sydney", -33.8688, 151.2093),
    City("Cairo", 30.0444, 31.2357),
    City("Mexico City", 19.4326, -99.1332),
    City("Moscow", 55.7558, 37.6176),
)


@dataclass(frozen=True)
class GeographyConfig:
    """Tunable geographic heuristics.

    Attributes:
        ocean_regions: Named water bodies checked first.
        continental_regions: Land boxes checked when no ocean matches.
        density_regions: Population multipliers by region.
        desert_belts: Boxes classified as desert on land.
        cities: Reference cities for nearest-city labels.
        ocean_fraction: Probability of ocean when no table matches.
        city_fraction: Probability that generic land is urban.
        polar_latitude_deg: Land beyond this |latitude| is mountainous.
        base_population_density: People per km² before multipliers.
    """

    ocean_regions: tuple[OceanRegion, ...] = OCEAN_REGIONS
    continental_regions: tuple[WeightedRegion, ...] = CONTINENTAL_REGIONS
    density_regions: tuple[WeightedRegion, ...] = DENSITY_REGIONS
    desert_belts: tuple[Box, ...] = DESERT_BELTS
    cities: tuple[City, ...] = field(default=MAJOR_CITIES, repr=False)
    ocean_fraction: float = 0.71
    city_fraction: float = 0.15
    polar_latitude_deg: float = 60.0
    base_population_density: float = 50.0


DEFAULT_GEOGRAPHY = GeographyConfig()


def find_ocean(lat: float, lon: float, config: GeographyConfig = DEFAULT_GEOGRAPHY) -> OceanRegion | None:
    """Return the first water body containing the point, if any."""
    for region in config.ocean_regions:
        if region.contains(lat, lon):
            return region
    return None


def find_continent(lat: float, lon: float, config: GeographyConfig = DEFAULT_GEOGRAPHY) -> WeightedRegion | None:
    for region in config.continental_regions:
        if region.box.contains(lat, lon):
            return region
    return None


def _classify_land(lat: float, lon: float, rng: np.random.Generator, config: GeographyConfig) -> Terrain:
    if abs(lat) > config.polar_latitude_deg:
        return Terrain.MOUNTAIN
    if any(belt.contains(lat, lon) for belt in config.desert_belts):
        return Terrain.DESERT
    if rng.random() < config.city_fraction:
        return Terrain.CITY
    return Terrain.LAND


def classify_terrain(
    lat: float,
    lon: float,
    rng: np.random.Generator,
    config: GeographyConfig = DEFAULT_GEOGRAPHY,
) -> tuple[Terrain, str | None]:
    """Classify the surface at a coordinate.

    Looks the point up in the ocean table, then the continental table.
    When neither matches, draws ocean with probability
    ``config.ocean_fraction`` (Earth's ~71 % water cover).

    Args:
        lat: Latitude in degrees.
        lon: Longitude in degrees.
        rng: Random generator for the fallback and urban draws.
        config: Geographic tables.

    Returns:
        Tuple of (terrain, ocean name or None).
    """
    ocean = find_ocean(lat, lon, config)
    if ocean is not None:
        return Terrain.OCEAN, ocean.name

    if find_continent(lat, lon, config) is not None:
        return _classify_land(lat, lon, rng, config), None

    logger.debug("No region matched (%.2f, %.2f); using ocean/land split", lat, lon)
    if rng.random() < config.ocean_fraction:
        return Terrain.OCEAN, None
    return _classify_land(lat, lon, rng, config), None


def population_density(
    lat: float,
    lon: float,
    rng: np.random.Generator,
    config: GeographyConfig = DEFAULT_GEOGRAPHY,
) -> float:
    """Rough people-per-km² estimate from latitude and region.

    base * cos(lat) * region factor * (1 + U[0, 1)), rounded.
    """
    lat_factor = math.cos(math.radians(lat))
    factor = 1.0
    for region in config.density_regions:
        if region.box.contains(lat, lon):
            factor = region.factor
    return float(round(config.base_population_density * lat_factor * factor * (1.0 + rng.random())))


def terrain_elevation(
    lat: float,
    lon: float,
    terrain: Terrain,
    rng: np.random.Generator,
    config: GeographyConfig = DEFAULT_GEOGRAPHY,
) -> float:
    """Elevation estimate in metres above sea level."""
    if terrain is Terrain.OCEAN:
        return 0.0
    if abs(lat) > config.polar_latitude_deg:
        return 500.0 + rng.random() * 2000.0
    if abs(lat) < 30.0 and -20.0 < lon < 50.0:
        return 200.0 + rng.random() * 800.0
    return rng.random() * 500.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in km."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_KM * 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))


def nearest_city(lat: float, lon: float, config: GeographyConfig = DEFAULT_GEOGRAPHY) -> tuple[str, float]:
    """Closest reference city and its distance in km."""
    best = min(config.cities, key=lambda c: haversine_km(lat, lon, c.latitude, c.longitude))
    return best.name, haversine_km(lat, lon, best.latitude, best.longitude)


def distance_to_coast_km(lat: float, lon: float) -> float:
    """Very rough distance from an ocean point to the nearest coast."""
    if (120 < lon < 180) or (-180 < lon < -100):
        return 800.0 + abs(lat) * 10.0
    if -70 < lon < -10 and -60 < lat < 70:
        return 400.0 + abs(lat - 30.0) * 5.0
    if 40 < lon < 120 and -60 < lat < 30:
        return 500.0 + abs(lat + 20.0) * 8.0
    return 100.0 + abs(lat) * 3.0
