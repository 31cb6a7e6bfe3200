"""Impact-point prediction from coarse object parameters.

Derives plausible orbital elements from the observed velocity and miss
distance, solves Kepler's equation, and maps the resulting direction to
an impact site on Earth. All randomness flows through an injected
``numpy.random.Generator`` so a fixed seed reproduces a run exactly.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import numpy as np

from neoimpact.core.geography import (
    DEFAULT_GEOGRAPHY,
    GeographyConfig,
    Terrain,
    classify_terrain,
    nearest_city,
    population_density,
    terrain_elevation,
)
from neoimpact.core.kepler import OrbitalElements, StateVector, compute_state
from neoimpact.utils.constants import (
    AU_KM,
    DEFAULT_DENSITY_KG_M3,
    DEFAULT_DIAMETER_KM,
    DEFAULT_MISS_DISTANCE_KM,
    DEFAULT_VELOCITY_KM_S,
    EARTH_ESCAPE_VELOCITY_KM_S,
    EARTH_MU_KM3_S2,
    EARTH_RADIUS_KM,
    EARTH_ROTATION_DEG_PER_HOUR,
    J2000_JULIAN_DAY,
    MAX_APPROACH_ANGLE_DEG,
    MAX_ECCENTRICITY,
    MAX_IMPACT_LATITUDE_DEG,
    MAX_IMPACT_PROBABILITY,
    MIN_APPROACH_ANGLE_DEG,
    MIN_VELOCITY_KM_S,
    SIZE_ANGLE_BONUS_DEG,
    SIZE_ANGLE_REFERENCE_M,
)

logger = logging.getLogger(__name__)

_UNIX_EPOCH_JULIAN_DAY = 2440587.5


@dataclass(frozen=True)
class ObjectParameters:
    """Physical description of an approaching object.

    Attributes:
        diameter_m: Diameter in metres.
        velocity_km_s: Relative velocity in km/s.
        density_kg_m3: Bulk density in kg/m³.
        miss_distance_km: Geocentric miss distance in km.
        latitude: Optional impact latitude override in degrees.
        longitude: Optional impact longitude override in degrees.
        name: Optional display name.
        object_id: Optional catalog identifier.
    """

    diameter_m: float
    velocity_km_s: float
    density_kg_m3: float = DEFAULT_DENSITY_KG_M3
    miss_distance_km: float = DEFAULT_MISS_DISTANCE_KM
    latitude: float | None = None
    longitude: float | None = None
    name: str | None = None
    object_id: str | None = None

    def __post_init__(self) -> None:
        for label in ("diameter_m", "velocity_km_s", "density_kg_m3", "miss_distance_km"):
            value = getattr(self, label)
            if not math.isfinite(value):
                logger.error("Non-finite %s: %r", label, value)
                raise ValueError(f"{label} must be finite, got {value!r}")
            if value < 0:
                logger.error("Negative %s: %r", label, value)
                raise ValueError(f"{label} must be non-negative, got {value!r}")

        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude overrides must be given together")
        if self.latitude is not None:
            if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
                raise ValueError("latitude/longitude overrides must be finite")
            if abs(self.latitude) > 90.0:
                raise ValueError(f"latitude must be within [-90, 90], got {self.latitude}")

    @property
    def has_location_override(self) -> bool:
        return self.latitude is not None

    @classmethod
    def from_neo_record(cls, record: dict[str, Any], density_kg_m3: float = DEFAULT_DENSITY_KG_M3) -> ObjectParameters:
        """Build parameters from a NASA NeoWs object record.

        Missing fields fall back to 100 m, 20 km/s and 100 000 km.

        Args:
            record: Parsed NeoWs JSON object.
            density_kg_m3: Assumed bulk density.

        Returns:
            ObjectParameters for the record.
        """
        diameter_km = (
            record.get("estimated_diameter", {})
            .get("kilometers", {})
            .get("estimated_diameter_max")
        ) or DEFAULT_DIAMETER_KM

        approaches = record.get("close_approach_data") or [{}]
        approach = approaches[0]
        velocity = approach.get("relative_velocity", {}).get("kilometers_per_second")
        miss = approach.get("miss_distance", {}).get("kilometers")

        return cls(
            diameter_m=float(diameter_km) * 1000.0,
            velocity_km_s=float(velocity) if velocity else DEFAULT_VELOCITY_KM_S,
            density_kg_m3=density_kg_m3,
            miss_distance_km=float(miss) if miss else DEFAULT_MISS_DISTANCE_KM,
            name=record.get("name"),
            object_id=str(record["id"]) if record.get("id") is not None else None,
        )


@dataclass(frozen=True)
class OrbitSummary:
    """Derived orbit characteristics.

    Attributes:
        perihelion_km: Closest distance, a(1 - e).
        aphelion_km: Farthest distance, a(1 + e).
        period_years: Orbital period from Kepler's third law with a in AU.
        inclination_deg: Inclination in degrees.
    """

    perihelion_km: float
    aphelion_km: float
    period_years: float
    inclination_deg: float


@dataclass(frozen=True)
class ImpactGeometry:
    """Where and how the object meets the surface."""

    latitude: float
    longitude: float
    approach_angle_deg: float
    impact_velocity_km_s: float
    terrain: Terrain
    population_density: float       # people / km²
    elevation_m: float
    nearest_city: str | None = None
    nearest_city_distance_km: float | None = None
    ocean_name: str | None = None
    place_name: str | None = None


@dataclass(frozen=True)
class Trajectory:
    geometry: ImpactGeometry
    elements: OrbitalElements
    state: StateVector
    summary: OrbitSummary
    time_to_impact_hours: float
    impact_probability: float


def impact_velocity(velocity_km_s: float, distance_km: float) -> float:
    """Velocity at the surface after gravitational acceleration.

    Adds the escape-velocity contribution scaled to the starting distance
    in quadrature, so the result is never below the input velocity.
    """
    d = max(distance_km, EARTH_RADIUS_KM)
    gravity_term = EARTH_ESCAPE_VELOCITY_KM_S * math.sqrt(EARTH_RADIUS_KM / d)
    return math.sqrt(velocity_km_s ** 2 + gravity_term ** 2)


def time_to_impact_hours(distance_km: float, velocity_km_s: float) -> float:
    """Positive root of d = v0*t + a*t²/2 with a = mu/d², in hours."""
    if distance_km <= 0.0:
        return 0.0
    v0 = max(velocity_km_s, MIN_VELOCITY_KM_S)
    accel = EARTH_MU_KM3_S2 / max(distance_km, EARTH_RADIUS_KM) ** 2
    # 2d / (v0 + sqrt(v0² + 2ad)) avoids cancellation when a*d << v0²
    seconds = 2.0 * distance_km / (v0 + math.sqrt(v0 ** 2 + 2.0 * accel * distance_km))
    return seconds / 3600.0


def impact_probability(distance_km: float, diameter_m: float) -> float:
    """Heuristic impact likelihood in [0, 0.95]."""
    size_factor = min(1.0, diameter_m / 1000.0)
    distance_factor = max(0.0, 1.0 - distance_km / 1e6)
    return min(MAX_IMPACT_PROBABILITY, 0.3 * size_factor + 0.7 * distance_factor)


def approach_angle_deg(impact_velocity_km_s: float, diameter_m: float) -> float:
    """Entry angle from horizontal, increasing with speed and size."""
    reference = math.sqrt(2.0 * EARTH_MU_KM3_S2 / EARTH_RADIUS_KM)
    base = math.degrees(math.atan(impact_velocity_km_s / reference))
    bonus = min(1.0, diameter_m / SIZE_ANGLE_REFERENCE_M) * SIZE_ANGLE_BONUS_DEG
    return min(MAX_APPROACH_ANGLE_DEG, max(MIN_APPROACH_ANGLE_DEG, base + bonus))


def orbit_summary(elements: OrbitalElements) -> OrbitSummary:
    a = elements.semi_major_axis_km
    e = elements.eccentricity
    return OrbitSummary(
        perihelion_km=a * (1.0 - e),
        aphelion_km=a * (1.0 + e),
        period_years=math.sqrt((a / AU_KM) ** 3),
        inclination_deg=math.degrees(elements.inclination_rad),
    )


def julian_centuries_since_j2000(when: datetime) -> float:
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    jd = when.timestamp() / 86400.0 + _UNIX_EPOCH_JULIAN_DAY
    return (jd - J2000_JULIAN_DAY) / 36525.0


def _normalize_longitude(lon: float) -> float:
    return (lon + 180.0) % 360.0 - 180.0


def estimate_orbital_elements(
    velocity_km_s: float,
    distance_km: float,
    rng: np.random.Generator,
    epoch: datetime | None = None,
) -> OrbitalElements:
    """Orbital elements consistent with an observed speed and distance.

    The semi-major axis follows from vis-viva, a = 1 / (2/r - v²/mu).
    Hyperbolic approaches give a negative value; its magnitude is used.
    The angular elements are drawn from ``rng``.

    Args:
        velocity_km_s: Observed relative velocity.
        distance_km: Observed distance; floored at Earth's radius.
        rng: Source of the random draws.
        epoch: Reference time, defaults to now (UTC).

    Returns:
        OrbitalElements with eccentricity clamped below 0.95.
    """
    r = max(distance_km, EARTH_RADIUS_KM)
    inverse_a = 2.0 / r - velocity_km_s ** 2 / EARTH_MU_KM3_S2
    a = abs(1.0 / inverse_a) if inverse_a != 0.0 else r

    eccentricity = min(rng.random() * 0.5 + 0.1, MAX_ECCENTRICITY)
    inclination = math.radians(rng.random() * 30.0)
    node = math.radians(rng.random() * 360.0)
    longitude_of_perihelion = math.radians(rng.random() * 360.0)
    mean_longitude = math.radians(rng.random() * 360.0)

    if epoch is None:
        epoch = datetime.now(timezone.utc)

    return OrbitalElements(
        semi_major_axis_km=a,
        eccentricity=eccentricity,
        inclination_rad=inclination,
        longitude_of_node_rad=node,
        argument_of_perihelion_rad=(longitude_of_perihelion - node) % (2.0 * math.pi),
        mean_anomaly_rad=(mean_longitude - longitude_of_perihelion) % (2.0 * math.pi),
        epoch_centuries=julian_centuries_since_j2000(epoch),
    )


class TrajectoryPredictor:
    """Predicts an impact site for an approaching object.

    Args:
        rng: Random generator. Built from ``seed`` when omitted.
        seed: Seed for a fresh generator; ignored if ``rng`` is given.
        config: Geographic heuristics used for the site description.
        now: Fixed reference time for the orbital epoch.

    Example::

        predictor = TrajectoryPredictor(seed=42)
        trajectory = predictor.predict(ObjectParameters(diameter_m=150, velocity_km_s=18))
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        config: GeographyConfig = DEFAULT_GEOGRAPHY,
        now: datetime | None = None,
    ) -> None:
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.config = config
        self.now = now

    def predict(self, params: ObjectParameters) -> Trajectory:
        """Run the full prediction for one object.

        Args:
            params: Object parameters (already floored by the caller).

        Returns:
            Trajectory with the impact geometry and orbit details.
        """
        elements = estimate_orbital_elements(
            params.velocity_km_s, params.miss_distance_km, self.rng, self.now,
        )
        state = compute_state(elements)

        hours = time_to_impact_hours(params.miss_distance_km, params.velocity_km_s)
        v_impact = impact_velocity(params.velocity_km_s, params.miss_distance_km)

        if params.has_location_override:
            lat = float(params.latitude)
            lon = _normalize_longitude(float(params.longitude))
        else:
            lat, lon = self._surface_point(state, hours)

        terrain, ocean_name = classify_terrain(lat, lon, self.rng, self.config)
        density = population_density(lat, lon, self.rng, self.config)
        elevation = terrain_elevation(lat, lon, terrain, self.rng, self.config)
        city, city_km = nearest_city(lat, lon, self.config)

        geometry = ImpactGeometry(
            latitude=lat,
            longitude=lon,
            approach_angle_deg=approach_angle_deg(v_impact, params.diameter_m),
            impact_velocity_km_s=v_impact,
            terrain=terrain,
            population_density=density,
            elevation_m=elevation,
            nearest_city=city,
            nearest_city_distance_km=city_km,
            ocean_name=ocean_name,
        )
        logger.debug(
            "Predicted impact at (%.3f, %.3f) on %s, v=%.2f km/s, angle=%.1f deg",
            lat, lon, terrain.value, v_impact, geometry.approach_angle_deg,
        )
        return Trajectory(
            geometry=geometry,
            elements=elements,
            state=state,
            summary=orbit_summary(elements),
            time_to_impact_hours=hours,
            impact_probability=impact_probability(params.miss_distance_km, params.diameter_m),
        )

    def _surface_point(self, state: StateVector, hours: float) -> tuple[float, float]:
        x, y, z = (float(c) for c in state.position_km)
        r = math.sqrt(x * x + y * y + z * z)
        if r == 0.0:
            return 0.0, 0.0
        lat = math.degrees(math.asin(max(-1.0, min(1.0, z / r))))
        lon = math.degrees(math.atan2(y, x)) + EARTH_ROTATION_DEG_PER_HOUR * hours
        lat = max(-MAX_IMPACT_LATITUDE_DEG, min(MAX_IMPACT_LATITUDE_DEG, lat))
        return lat, _normalize_longitude(lon)
