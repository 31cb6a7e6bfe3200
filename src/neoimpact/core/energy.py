"""Impact kinetic energy and TNT equivalents."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from neoimpact.utils.constants import (
    DEFAULT_DENSITY_KG_M3,
    MEGATON_TNT_J,
    MIN_DIAMETER_M,
    MIN_VELOCITY_KM_S,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnergyProfile:
    """Kinetic energy released by an impactor.

    Attributes:
        kinetic_energy_j: Energy in joules.
        megatons_tnt: Energy in megatons of TNT.
        mass_kg: Impactor mass in kg.
        diameter_m: Diameter used.
        velocity_km_s: Velocity used.
        density_kg_m3: Density used.
    """

    kinetic_energy_j: float
    megatons_tnt: float
    mass_kg: float
    diameter_m: float
    velocity_km_s: float
    density_kg_m3: float


@dataclass(frozen=True)
class ImpactFrequency:
    average_interval_years: float
    description: str


def floor_inputs(diameter_m: float, velocity_km_s: float) -> tuple[float, float]:
    """Clamp diameter and velocity to their minimum physical values."""
    return max(diameter_m, MIN_DIAMETER_M), max(velocity_km_s, MIN_VELOCITY_KM_S)


def joules_to_megatons(energy_j: float) -> float:
    return energy_j / MEGATON_TNT_J


def megatons_to_joules(megatons: float) -> float:
    return megatons * MEGATON_TNT_J


def kinetic_energy(
    diameter_m: float,
    velocity_km_s: float,
    density: float = DEFAULT_DENSITY_KG_M3,
) -> EnergyProfile:
    """Kinetic energy of a spherical impactor.

    E = 0.5 * m * v², m = density * (4/3) * pi * (D/2)³, v in m/s.

    Args:
        diameter_m: Diameter in metres (> 0).
        velocity_km_s: Velocity in km/s (> 0).
        density: Bulk density in kg/m³.

    Returns:
        EnergyProfile with joule and megaton values.
    """
    radius_m = diameter_m / 2.0
    mass = density * (4.0 / 3.0) * math.pi * radius_m ** 3
    velocity_m_s = velocity_km_s * 1000.0
    energy_j = 0.5 * mass * velocity_m_s ** 2
    megatons = joules_to_megatons(energy_j)

    logger.debug("Kinetic energy: D=%.1f m, v=%.2f km/s -> %.3e J (%.4g MT)", diameter_m, velocity_km_s, energy_j, megatons)
    return EnergyProfile(
        kinetic_energy_j=energy_j,
        megatons_tnt=megatons,
        mass_kg=mass,
        diameter_m=diameter_m,
        velocity_km_s=velocity_km_s,
        density_kg_m3=density,
    )


_ENERGY_COMPARISONS: tuple[tuple[float, str], ...] = (
    (0.001, "Similar to a small conventional bomb"),
    (0.015, "Similar to Hiroshima bomb"),
    (1.0, "Multiple times larger than largest WWII bombs"),
    (50.0, "Similar to largest nuclear weapons ever tested"),
    (1000.0, "More energy than the last eruption of Yellowstone"),
    (100000.0, "Regional extinction-level energy"),
)


def energy_comparison(megatons: float) -> str:
    """Everyday comparison for a megaton figure."""
    for upper, text in _ENERGY_COMPARISONS:
        if megatons < upper:
            return text
    return "Global extinction-level energy (Chicxulub-class)"


_FREQUENCY_BANDS: tuple[tuple[float, float, str], ...] = (
    (5.0, 1.0, "Happens multiple times per year (usually burns up in the atmosphere)"),
    (20.0, 5.0, "Happens every few years (Chelyabinsk-class events)"),
    (50.0, 100.0, "Happens every century (Tunguska-class events)"),
    (100.0, 1000.0, "Happens every millennium"),
    (200.0, 10000.0, "Happens every 10,000 years"),
    (500.0, 100000.0, "Happens every 100,000 years"),
    (1000.0, 1000000.0, "Happens every million years"),
)


def impact_frequency(diameter_m: float) -> ImpactFrequency:
    """Average recurrence interval for impacts of at least this size.

    Beyond 1 km the interval grows as (D / 1 km)^2.5 million years.
    """
    for upper, years, text in _FREQUENCY_BANDS:
        if diameter_m < upper:
            return ImpactFrequency(average_interval_years=years, description=text)

    years = float(round((diameter_m / 1000.0) ** 2.5 * 1e6))
    return ImpactFrequency(
        average_interval_years=years,
        description=f"Extinction-level event, happens every {years / 1e6:.0f} million years",
    )
