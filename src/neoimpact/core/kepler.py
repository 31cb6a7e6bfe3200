"""Kepler's equation and conic state conversion.

Single-conic, two-body approximation only. There is no perturbation
model here; the results are illustrative, not mission-grade.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from neoimpact.utils.constants import (
    EARTH_MU_KM3_S2,
    EARTH_OBLIQUITY_DEG,
    KEPLER_MAX_ITERATIONS,
    KEPLER_TOLERANCE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitalElements:
    """Classical orbital elements of an approaching object.

    Attributes:
        semi_major_axis_km: Semi-major axis in km.
        eccentricity: Eccentricity, 0 <= e < 1.
        inclination_rad: Inclination in radians.
        longitude_of_node_rad: Longitude of the ascending node in radians.
        argument_of_perihelion_rad: Argument of perihelion in radians.
        mean_anomaly_rad: Mean anomaly in radians.
        epoch_centuries: Julian centuries since J2000.0.
    """

    semi_major_axis_km: float
    eccentricity: float
    inclination_rad: float
    longitude_of_node_rad: float
    argument_of_perihelion_rad: float
    mean_anomaly_rad: float
    epoch_centuries: float = 0.0


@dataclass(frozen=True)
class KeplerSolution:
    """Result of a Kepler solve.

    Attributes:
        eccentric_anomaly: Best estimate of E in radians.
        iterations: Newton-Raphson steps taken.
        converged: False if the iteration cap was hit first.
    """

    eccentric_anomaly: float
    iterations: int
    converged: bool


@dataclass(frozen=True)
class StateVector:
    """Position and velocity in the Earth-referenced equatorial frame.

    Attributes:
        position_km: [x, y, z] position in km.
        velocity_km_s: [vx, vy, vz] velocity in km/s.
        eccentric_anomaly: Eccentric anomaly used, radians.
        true_anomaly: True anomaly, radians.
        converged: Whether the Kepler solve converged.
    """

    position_km: NDArray[np.float64]  # shape (3,)
    velocity_km_s: NDArray[np.float64]  # shape (3,)
    eccentric_anomaly: float
    true_anomaly: float
    converged: bool = True


def solve_kepler(
    mean_anomaly: float,
    eccentricity: float,
    tolerance: float = KEPLER_TOLERANCE,
    max_iterations: int = KEPLER_MAX_ITERATIONS,
) -> KeplerSolution:
    """Solve M = E - e*sin(E) for E by Newton-Raphson.

    Seeded with E0 = M + e*sin(M). Iterates until |dE| <= tolerance or the
    iteration cap is reached. Hitting the cap is not an error: the last
    estimate is returned with ``converged=False``.

    Args:
        mean_anomaly: Mean anomaly M in radians.
        eccentricity: Orbital eccentricity, pre-clamped to [0, 1).
        tolerance: Convergence threshold on |dE|.
        max_iterations: Iteration cap.

    Returns:
        KeplerSolution with the eccentric anomaly.
    """
    E = mean_anomaly + eccentricity * math.sin(mean_anomaly)
    iterations = 0
    delta = math.inf

    while iterations < max_iterations:
        delta_m = mean_anomaly - (E - eccentricity * math.sin(E))
        delta = delta_m / (1.0 - eccentricity * math.cos(E))
        E += delta
        iterations += 1
        if abs(delta) <= tolerance:
            break

    converged = abs(delta) <= tolerance
    if not converged:
        logger.debug(
            "Kepler solve did not converge after %d iterations (M=%.6f, e=%.4f, |dE|=%.2e)",
            iterations, mean_anomaly, eccentricity, abs(delta),
        )
    return KeplerSolution(eccentric_anomaly=E, iterations=iterations, converged=converged)


def true_anomaly(eccentric_anomaly: float, eccentricity: float) -> float:
    """True anomaly from eccentric anomaly, in radians."""
    return 2.0 * math.atan2(
        math.sqrt(1.0 + eccentricity) * math.sin(eccentric_anomaly / 2.0),
        math.sqrt(1.0 - eccentricity) * math.cos(eccentric_anomaly / 2.0),
    )


def orbital_plane_position(
    semi_major_axis: float, eccentricity: float, eccentric_anomaly: float
) -> NDArray[np.float64]:
    """Position in the orbital (perifocal) plane via the true anomaly.

    Returns:
        Array [x, y, 0] in the units of ``semi_major_axis``.
    """
    r = semi_major_axis * (1.0 - eccentricity * math.cos(eccentric_anomaly))
    nu = true_anomaly(eccentric_anomaly, eccentricity)
    return np.array([r * math.cos(nu), r * math.sin(nu), 0.0], dtype=np.float64)


def orbital_plane_velocity(
    semi_major_axis: float,
    eccentricity: float,
    eccentric_anomaly: float,
    mu: float = EARTH_MU_KM3_S2,
) -> NDArray[np.float64]:
    """Velocity in the perifocal plane, in km/s for km inputs."""
    a = abs(semi_major_axis)
    r = a * (1.0 - eccentricity * math.cos(eccentric_anomaly))
    if r <= 0.0 or a == 0.0:
        return np.zeros(3, dtype=np.float64)
    factor = math.sqrt(mu * a) / r
    return np.array(
        [
            -factor * math.sin(eccentric_anomaly),
            factor * math.sqrt(1.0 - eccentricity ** 2) * math.cos(eccentric_anomaly),
            0.0,
        ],
        dtype=np.float64,
    )


def perifocal_to_ecliptic(
    longitude_of_node: float, inclination: float, argument_of_perihelion: float
) -> NDArray[np.float64]:
    """Rotation matrix R3(-Ω) R1(-i) R3(-ω) from perifocal to ecliptic frame."""
    cos_o, sin_o = math.cos(longitude_of_node), math.sin(longitude_of_node)
    cos_i, sin_i = math.cos(inclination), math.sin(inclination)
    cos_w, sin_w = math.cos(argument_of_perihelion), math.sin(argument_of_perihelion)

    return np.array(
        [
            [cos_o * cos_w - sin_o * sin_w * cos_i, -cos_o * sin_w - sin_o * cos_w * cos_i, sin_o * sin_i],
            [sin_o * cos_w + cos_o * sin_w * cos_i, -sin_o * sin_w + cos_o * cos_w * cos_i, -cos_o * sin_i],
            [sin_w * sin_i, cos_w * sin_i, cos_i],
        ],
        dtype=np.float64,
    )


def ecliptic_to_equatorial(obliquity_deg: float = EARTH_OBLIQUITY_DEG) -> NDArray[np.float64]:
    """Rotation about the x-axis by Earth's axial obliquity."""
    eps = math.radians(obliquity_deg)
    c, s = math.cos(eps), math.sin(eps)
    return np.array(
        [
            [1.0, 0.0, 0.0],
            [0.0, c, -s],
            [0.0, s, c],
        ],
        dtype=np.float64,
    )


def compute_state(elements: OrbitalElements, mu: float = EARTH_MU_KM3_S2) -> StateVector:
    """Convert orbital elements into an Earth-referenced state vector.

    Solves Kepler's equation, places the object in its orbital plane,
    rotates by (Ω, i, ω) into the ecliptic and then by the obliquity into
    the equatorial frame.

    Args:
        elements: Orbital elements (eccentricity already clamped).
        mu: Gravitational parameter in km³/s².

    Returns:
        StateVector in km and km/s.
    """
    solution = solve_kepler(elements.mean_anomaly_rad, elements.eccentricity)
    E = solution.eccentric_anomaly

    rotation = ecliptic_to_equatorial() @ perifocal_to_ecliptic(
        elements.longitude_of_node_rad,
        elements.inclination_rad,
        elements.argument_of_perihelion_rad,
    )
    position = rotation @ orbital_plane_position(elements.semi_major_axis_km, elements.eccentricity, E)
    velocity = rotation @ orbital_plane_velocity(elements.semi_major_axis_km, elements.eccentricity, E, mu)

    logger.debug(
        "State computed: |r|=%.1f km, |v|=%.3f km/s, E=%.6f (%d iterations)",
        float(np.linalg.norm(position)), float(np.linalg.norm(velocity)), E, solution.iterations,
    )
    return StateVector(
        position_km=position,
        velocity_km_s=velocity,
        eccentric_anomaly=E,
        true_anomaly=true_anomaly(E, elements.eccentricity),
        converged=solution.converged,
    )
