"""Casualty estimates from population density and effect zones.

Fatalities are counted ring by ring from ground zero outward. Each ring
is the annulus between a zone and the next-smaller one, so nobody is
counted twice. Seismic deaths cover the band between the outermost
damage ring and the felt radius. Burn and blast injuries use their own
rings outside the fireball.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Sequence

from scipy import integrate

from neoimpact.core.effects import (
    CRATER,
    EARDRUM_RUPTURE,
    FIREBALL,
    HOMES_LEVELED,
    MODERATE_BURNS,
    SEVERE_BLAST,
    SEVERE_BURNS,
    EffectZone,
)
from neoimpact.utils.constants import EARTH_SURFACE_AREA_KM2

logger = logging.getLogger(__name__)

DensityProfile = Callable[[float], float]
"""People per km² as a function of distance from ground zero in km."""

# (zone name, casualty field, fatality fraction), innermost first
FATALITY_RINGS: tuple[tuple[str, str, float], ...] = (
    (CRATER, "crater", 1.0),
    (FIREBALL, "fireball", 0.9),
    (SEVERE_BURNS, "thermal", 0.5),
    (SEVERE_BLAST, "blast", 0.7),
    (HOMES_LEVELED, "wind", 0.5),
)

# Injury chains, one per mechanism. Each starts at the fireball edge and
# lists (zone name, injury field, injured fraction), innermost first.
INJURY_CHAINS: tuple[tuple[tuple[str, str, float], ...], ...] = (
    (
        (SEVERE_BURNS, "third_degree_burns", 0.8),
        (MODERATE_BURNS, "second_degree_burns", 0.5),
    ),
    (
        (SEVERE_BLAST, "lung_damage", 0.3),
        (EARDRUM_RUPTURE, "eardrum_rupture", 0.2),
    ),
)

# Largest radius whose disc area equals Earth's surface area
_MAX_RADIUS_KM = math.sqrt(EARTH_SURFACE_AREA_KM2 / math.pi)


@dataclass(frozen=True)
class CasualtyBreakdown:
    """Fatalities per cause, plus injuries.

    Burn and blast injuries are counted per mechanism, so a person in
    overlapping rings may appear under both; ``injuries`` is not part of
    ``total``.

    Attributes:
        crater: Deaths inside the crater.
        fireball: Deaths inside the fireball ring.
        thermal: Deaths from severe burns.
        blast: Deaths from severe overpressure.
        wind: Deaths where homes are leveled.
        earthquake: Deaths from ground shaking beyond the damage rings.
        total: Sum of all causes of death.
        exposed_population: People within the felt radius.
        third_degree_burns: Injured between the fireball and severe-burn radius.
        second_degree_burns: Injured between the severe- and moderate-burn radius.
        lung_damage: Injured between the fireball and severe-blast radius.
        eardrum_rupture: Injured between the severe-blast and eardrum radius.
        injuries: Sum of all injuries.
    """

    crater: int = 0
    fireball: int = 0
    thermal: int = 0
    blast: int = 0
    wind: int = 0
    earthquake: int = 0
    total: int = 0
    exposed_population: int = 0
    third_degree_burns: int = 0
    second_degree_burns: int = 0
    lung_damage: int = 0
    eardrum_rupture: int = 0
    injuries: int = 0


def earthquake_fatality_rate(magnitude: float) -> float:
    """Fraction of the shaken population killed, by magnitude band."""
    if magnitude < 4.0:
        return 0.0001
    if magnitude < 5.0:
        return 0.001
    if magnitude < 6.0:
        return 0.01
    if magnitude < 7.0:
        return 0.05
    if magnitude < 8.0:
        return 0.1
    return 0.2


def round_half_up(value: float) -> int:
    """Round to the nearest non-negative integer, halves away from zero."""
    return max(0, int(math.floor(value + 0.5)))


def annulus_population(
    inner_km: float,
    outer_km: float,
    density: float,
    density_profile: DensityProfile | None = None,
) -> float:
    """People living between two radii around ground zero.

    With a profile the density is integrated radially,
    ∫ ρ(r)·2πr dr; otherwise the uniform density times the ring area.
    """
    inner = min(max(inner_km, 0.0), _MAX_RADIUS_KM)
    outer = min(max(outer_km, 0.0), _MAX_RADIUS_KM)
    if outer <= inner:
        return 0.0
    if density_profile is None:
        return density * math.pi * (outer ** 2 - inner ** 2)

    value, _abserr = integrate.quad(lambda r: density_profile(r) * 2.0 * math.pi * r, inner, outer, limit=100)
    return max(value, 0.0)


def estimate_casualties(
    density: float,
    zones: Sequence[EffectZone],
    earthquake_magnitude: float,
    felt_radius_km: float,
    density_profile: DensityProfile | None = None,
) -> CasualtyBreakdown:
    """Estimate fatalities and injuries for one impact.

    Args:
        density: Uniform population density in people/km².
        zones: Effect zones; looked up by name.
        earthquake_magnitude: Moment magnitude of the impact quake.
        felt_radius_km: Radius within which shaking is felt.
        density_profile: Optional radial density overriding ``density``.

    Returns:
        CasualtyBreakdown with non-negative integer counts.

    Raises:
        ValueError: If density is negative or not finite.
    """
    if not math.isfinite(density) or density < 0:
        logger.error("Invalid population density: %r", density)
        raise ValueError(f"density must be a non-negative finite number, got {density!r}")

    radii = {zone.name: zone.radius_km for zone in zones}
    counts: dict[str, int] = {}
    inner = 0.0

    for zone_name, cause, fraction in FATALITY_RINGS:
        # Running maximum keeps each ring at non-negative area
        outer = max(inner, radii.get(zone_name, inner))
        people = annulus_population(inner, outer, density, density_profile)
        counts[cause] = round_half_up(people * fraction)
        inner = outer

    shaken = annulus_population(inner, felt_radius_km, density, density_profile)
    counts["earthquake"] = round_half_up(shaken * earthquake_fatality_rate(earthquake_magnitude))

    exposed = annulus_population(0.0, max(inner, felt_radius_km), density, density_profile)
    total = sum(counts.values())

    injured: dict[str, int] = {}
    for chain in INJURY_CHAINS:
        inner = radii.get(FIREBALL, 0.0)
        for zone_name, kind, fraction in chain:
            outer = max(inner, radii.get(zone_name, inner))
            injured[kind] = round_half_up(annulus_population(inner, outer, density, density_profile) * fraction)
            inner = outer

    logger.debug(
        "Casualties: total=%d, injuries=%d, exposed=%.0f, density=%.1f/km²",
        total, sum(injured.values()), exposed, density,
    )
    return CasualtyBreakdown(
        **counts,
        total=total,
        exposed_population=round_half_up(exposed),
        **injured,
        injuries=sum(injured.values()),
    )
