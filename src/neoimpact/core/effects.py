"""Scaling laws that map impact energy to physical effects.

Each function is stateless and reproduces a published empirical fit:

- Crater: Collins et al. style energy scaling, D = (E·1e7 / 9.1e24)^(1/2.59) km
- Earthquake: Gutenberg-Richter, M = (log10 E - 4.8) / 1.5
- Tsunami: Ward & Asphaug (2000), H = 1.88 · E_MT^0.22 m
- Fireball, thermal, blast and wind radii: power laws in E_MT

Seismic and tsunami estimates live only in this module.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from neoimpact.core.energy import EnergyProfile
from neoimpact.core.geography import Terrain, distance_to_coast_km
from neoimpact.utils.constants import (
    AVERAGE_OCEAN_DEPTH_M,
    JOULES_TO_ERG,
    MS_TO_MPH,
    STANDARD_ATMOSPHERE_PA,
    STANDARD_GRAVITY_M_S2,
)

logger = logging.getLogger(__name__)

# Thermal radius coefficients, k·E^0.41 / 1000 km
SEVERE_BURN_K = 1300.0
MODERATE_BURN_K = 1900.0
MINOR_BURN_K = 2500.0
CLOTHES_IGNITION_K = 1100.0
TREES_IGNITION_K = 1400.0

# Blast overpressure divisors, (E/k)^0.33 km
SEVERE_BLAST_K = 100.0      # lung damage
MODERATE_BLAST_K = 30.0
LIGHT_BLAST_K = 10.0
EARDRUM_RUPTURE_K = 50.0

# Wind damage factors, E^0.33 · f km
EF5_WIND_F = 0.8
HOMES_LEVELED_F = 0.6
TREES_KNOCKED_F = 1.5

MIN_CRATER_DIAMETER_KM = 0.001
MAX_TSUNAMI_HEIGHT_M = 1000.0
MIN_TSUNAMI_ARRIVAL_MIN = 5.0
MAX_AFFECTED_COASTLINE_KM = 5000.0
SHOCK_WAVE_BASE_DB = 194.0
MAX_SHOCK_WAVE_DB = 300.0
SIMPLE_CRATER_LIMIT_KM = 3.2

# Zone names shared with the casualty estimator
CRATER = "crater"
FIREBALL = "fireball"
SEVERE_BURNS = "severe_burns"
MODERATE_BURNS = "moderate_burns"
MINOR_BURNS = "minor_burns"
CLOTHES_IGNITION = "clothes_ignition"
TREES_IGNITION = "trees_ignition"
SEVERE_BLAST = "severe_blast"
MODERATE_BLAST = "moderate_blast"
LIGHT_BLAST = "light_blast"
EARDRUM_RUPTURE = "eardrum_rupture"
EF5_WIND = "ef5_wind"
HOMES_LEVELED = "homes_leveled"
TREES_KNOCKED = "trees_knocked"
EARTHQUAKE = "earthquake"
TSUNAMI = "tsunami"


@dataclass(frozen=True)
class EffectZone:
    """A circular effect region around ground zero.

    Attributes:
        name: Zone identifier.
        radius_km: Outer radius in km.
        magnitude: Optional scalar for the zone (Mw, metres, mph).
    """

    name: str
    radius_km: float
    magnitude: float | None = None


@dataclass(frozen=True)
class TsunamiDetails:
    wave_height_m: float
    wave_speed_km_h: float
    distance_to_coast_km: float
    arrival_time_min: float
    affected_coastline_km: float


@dataclass(frozen=True)
class ImpactEffects:
    """All effect magnitudes for one impact. Radii in km."""

    crater_diameter_km: float
    crater_depth_km: float
    crater_volume_km3: float
    fireball_radius_km: float
    severe_burn_radius_km: float
    moderate_burn_radius_km: float
    minor_burn_radius_km: float
    clothes_ignition_radius_km: float
    trees_ignition_radius_km: float
    severe_blast_radius_km: float
    moderate_blast_radius_km: float
    light_blast_radius_km: float
    eardrum_rupture_radius_km: float
    shock_wave_decibels: float
    peak_wind_speed_mph: float
    ef5_wind_radius_km: float
    homes_leveled_radius_km: float
    trees_knocked_radius_km: float
    earthquake_magnitude: float
    felt_radius_km: float
    tsunami_height_m: float
    tsunami: TsunamiDetails | None = None

    @property
    def crater_radius_km(self) -> float:
        return self.crater_diameter_km / 2.0

    @property
    def earthquake_equivalent(self) -> str:
        return earthquake_equivalent(self.earthquake_magnitude)

    def zones(self) -> tuple[EffectZone, ...]:
        """Effect zones from ground zero outward, grouped by cause."""
        zones = [
            EffectZone(CRATER, self.crater_radius_km, self.crater_depth_km),
            EffectZone(FIREBALL, self.fireball_radius_km),
            EffectZone(SEVERE_BURNS, self.severe_burn_radius_km),
            EffectZone(MODERATE_BURNS, self.moderate_burn_radius_km),
            EffectZone(MINOR_BURNS, self.minor_burn_radius_km),
            EffectZone(CLOTHES_IGNITION, self.clothes_ignition_radius_km),
            EffectZone(TREES_IGNITION, self.trees_ignition_radius_km),
            EffectZone(SEVERE_BLAST, self.severe_blast_radius_km),
            EffectZone(MODERATE_BLAST, self.moderate_blast_radius_km),
            EffectZone(LIGHT_BLAST, self.light_blast_radius_km),
            EffectZone(EARDRUM_RUPTURE, self.eardrum_rupture_radius_km),
            EffectZone(EF5_WIND, self.ef5_wind_radius_km, self.peak_wind_speed_mph),
            EffectZone(HOMES_LEVELED, self.homes_leveled_radius_km),
            EffectZone(TREES_KNOCKED, self.trees_knocked_radius_km),
            EffectZone(EARTHQUAKE, self.felt_radius_km, self.earthquake_magnitude),
        ]
        if self.tsunami is not None:
            zones.append(EffectZone(TSUNAMI, self.tsunami.affected_coastline_km, self.tsunami_height_m))
        return tuple(zones)


def crater_diameter_km(energy_j: float) -> float:
    """Final crater diameter in km, floored at 1 m."""
    if energy_j <= 0.0:
        return MIN_CRATER_DIAMETER_KM
    diameter = (energy_j * JOULES_TO_ERG / 9.1e24) ** (1.0 / 2.59)
    return max(diameter, MIN_CRATER_DIAMETER_KM)


def crater_depth_km(diameter_km: float) -> float:
    """Simple craters are 0.2 D deep; complex ones collapse to 0.15 D."""
    ratio = 0.20 if diameter_km < SIMPLE_CRATER_LIMIT_KM else 0.15
    return ratio * diameter_km


def crater_volume_km3(diameter_km: float, depth_km: float) -> float:
    """Excavated volume, treating the crater as a cone."""
    return math.pi * (diameter_km / 2.0) ** 2 * depth_km / 3.0


def earthquake_magnitude(energy_j: float) -> float:
    """Moment magnitude from seismic energy, floored at 0."""
    if energy_j <= 0.0:
        return 0.0
    return max(0.0, (math.log10(energy_j) - 4.8) / 1.5)


def felt_radius_km(magnitude: float) -> float:
    return 10.0 ** (0.5 * magnitude)


def earthquake_equivalent(magnitude: float) -> str:
    """Historical earthquake of comparable magnitude."""
    if magnitude < 4:
        return "Minor tremor"
    if magnitude < 5:
        return "Moderate earthquake"
    if magnitude < 6:
        return "1989 Loma Prieta earthquake"
    if magnitude < 7:
        return "2010 Haiti earthquake"
    if magnitude < 8:
        return "1906 San Francisco earthquake"
    if magnitude < 9:
        return "2008 Sichuan earthquake"
    if magnitude < 10:
        return "2011 Tohoku earthquake"
    return "Strongest earthquake ever recorded"


def tsunami_height_m(megatons: float, terrain: Terrain | str) -> float:
    """Deep-water wave height for an ocean impact.

    Returns exactly 0.0 for every terrain other than ocean, whatever the
    energy.

    Args:
        megatons: Impact energy in megatons of TNT.
        terrain: Terrain at the impact point.

    Returns:
        Wave height in metres, capped at 1000 m.
    """
    if Terrain(terrain) is not Terrain.OCEAN or megatons <= 0.0:
        return 0.0
    return min(1.88 * megatons ** 0.22, MAX_TSUNAMI_HEIGHT_M)


def tsunami_details(megatons: float, latitude: float, longitude: float) -> TsunamiDetails:
    """Wave speed, arrival time and reach for an ocean impact."""
    height = tsunami_height_m(megatons, Terrain.OCEAN)
    speed_km_h = math.sqrt(STANDARD_GRAVITY_M_S2 * AVERAGE_OCEAN_DEPTH_M) * 3.6
    distance = distance_to_coast_km(latitude, longitude)
    arrival = max(distance / speed_km_h * 60.0, MIN_TSUNAMI_ARRIVAL_MIN)
    return TsunamiDetails(
        wave_height_m=height,
        wave_speed_km_h=speed_km_h,
        distance_to_coast_km=distance,
        arrival_time_min=arrival,
        affected_coastline_km=min(height * 100.0, MAX_AFFECTED_COASTLINE_KM),
    )


def fireball_radius_km(megatons: float) -> float:
    return 140.0 * max(megatons, 0.0) ** 0.4 / 1000.0


def thermal_radius_km(megatons: float, k: float = SEVERE_BURN_K) -> float:
    """Thermal radiation radius for coefficient ``k`` (burns or ignition)."""
    return k * max(megatons, 0.0) ** 0.41 / 1000.0


def blast_radius_km(megatons: float, k: float = SEVERE_BLAST_K) -> float:
    """Overpressure radius for divisor ``k``."""
    return (max(megatons, 0.0) / k) ** 0.33


def shock_wave_decibels(megatons: float) -> float:
    """Sound pressure level of the shock wave at ground zero.

    194 dB for 1 MT, +10 dB per factor of ten in energy, capped at 300 dB
    and floored at 0 dB.
    """
    if megatons <= 0.0:
        return 0.0
    level = SHOCK_WAVE_BASE_DB + 20.0 * math.log10(math.sqrt(megatons))
    return min(max(level, 0.0), MAX_SHOCK_WAVE_DB)


def peak_wind_speed_mph(energy_j: float, crater_radius_km: float, impact_velocity_km_s: float) -> float:
    """Peak blast wind at the crater rim.

    Overpressure is the energy spread over the hemisphere bounded by the
    rim, v = 470·sqrt(dP_atm) m/s, capped at the impact velocity.
    """
    radius_m = max(crater_radius_km, 0.0) * 1000.0
    if radius_m == 0.0 or energy_j <= 0.0:
        return 0.0
    volume_m3 = (2.0 / 3.0) * math.pi * radius_m ** 3
    overpressure_atm = (energy_j / volume_m3) / STANDARD_ATMOSPHERE_PA
    speed_m_s = min(470.0 * math.sqrt(overpressure_atm), impact_velocity_km_s * 1000.0)
    return speed_m_s * MS_TO_MPH


def wind_radius_km(megatons: float, factor: float = HOMES_LEVELED_F) -> float:
    return max(megatons, 0.0) ** 0.33 * factor


def compute_effects(
    energy: EnergyProfile,
    terrain: Terrain | str,
    impact_velocity_km_s: float,
    latitude: float | None = None,
    longitude: float | None = None,
) -> ImpactEffects:
    """Evaluate every scaling law for one impact.

    Args:
        energy: Impact energy.
        terrain: Terrain at ground zero.
        impact_velocity_km_s: Surface impact velocity, caps the peak wind.
        latitude: Impact latitude, used for tsunami arrival estimates.
        longitude: Impact longitude, used for tsunami arrival estimates.

    Returns:
        ImpactEffects with all radii and magnitudes.
    """
    terrain = Terrain(terrain)
    e_j = energy.kinetic_energy_j
    e_mt = energy.megatons_tnt

    crater_d = crater_diameter_km(e_j)
    depth = crater_depth_km(crater_d)
    magnitude = earthquake_magnitude(e_j)
    height = tsunami_height_m(e_mt, terrain)

    tsunami = None
    if terrain is Terrain.OCEAN and latitude is not None and longitude is not None:
        tsunami = tsunami_details(e_mt, latitude, longitude)

    effects = ImpactEffects(
        crater_diameter_km=crater_d,
        crater_depth_km=depth,
        crater_volume_km3=crater_volume_km3(crater_d, depth),
        fireball_radius_km=fireball_radius_km(e_mt),
        severe_burn_radius_km=thermal_radius_km(e_mt, SEVERE_BURN_K),
        moderate_burn_radius_km=thermal_radius_km(e_mt, MODERATE_BURN_K),
        minor_burn_radius_km=thermal_radius_km(e_mt, MINOR_BURN_K),
        clothes_ignition_radius_km=thermal_radius_km(e_mt, CLOTHES_IGNITION_K),
        trees_ignition_radius_km=thermal_radius_km(e_mt, TREES_IGNITION_K),
        severe_blast_radius_km=blast_radius_km(e_mt, SEVERE_BLAST_K),
        moderate_blast_radius_km=blast_radius_km(e_mt, MODERATE_BLAST_K),
        light_blast_radius_km=blast_radius_km(e_mt, LIGHT_BLAST_K),
        eardrum_rupture_radius_km=blast_radius_km(e_mt, EARDRUM_RUPTURE_K),
        shock_wave_decibels=shock_wave_decibels(e_mt),
        peak_wind_speed_mph=peak_wind_speed_mph(e_j, crater_d / 2.0, impact_velocity_km_s),
        ef5_wind_radius_km=wind_radius_km(e_mt, EF5_WIND_F),
        homes_leveled_radius_km=wind_radius_km(e_mt, HOMES_LEVELED_F),
        trees_knocked_radius_km=wind_radius_km(e_mt, TREES_KNOCKED_F),
        earthquake_magnitude=magnitude,
        felt_radius_km=felt_radius_km(magnitude),
        tsunami_height_m=height,
        tsunami=tsunami,
    )
    logger.debug(
        "Effects: crater=%.3f km, Mw=%.2f, fireball=%.3f km, tsunami=%.1f m (%s)",
        crater_d, magnitude, effects.fireball_radius_km, height, terrain.value,
    )
    return effects
