from __future__ import annotations

"""Physical constants and default parameters for impact modelling.

Units are noted per constant. Heuristic tables that describe geography
are illustrative approximations, not authoritative data.
"""

# --- Earth parameters ---
EARTH_RADIUS_KM: float = 6371.0
"""Mean radius of Earth in km."""

EARTH_MU_KM3_S2: float = 398600.4418
"""Earth gravitational parameter (GM) in km³/s²."""

EARTH_ESCAPE_VELOCITY_KM_S: float = 11.2
"""Escape velocity at Earth's surface in km/s."""

EARTH_OBLIQUITY_DEG: float = 23.439
"""Axial obliquity (ecliptic to equator) in degrees."""

EARTH_ROTATION_DEG_PER_HOUR: float = 15.041
"""Sidereal rotation rate of Earth in degrees per hour."""

EARTH_SURFACE_AREA_KM2: float = 5.10072e8
"""Total surface area of Earth in km²."""

STANDARD_GRAVITY_M_S2: float = 9.81
"""Surface gravitational acceleration in m/s²."""

AU_KM: float = 149597870.7
"""Astronomical unit in km."""

J2000_JULIAN_DAY: float = 2451545.0
"""Julian day of the J2000.0 epoch."""

# --- Kepler solver ---
KEPLER_TOLERANCE: float = 1e-6
"""Convergence threshold on |ΔE| in radians."""

KEPLER_MAX_ITERATIONS: int = 30
"""Iteration cap for the Newton-Raphson Kepler solve."""

MAX_ECCENTRICITY: float = 0.95
"""Eccentricities are clamped below this before solving."""

# --- Impactor defaults ---
DEFAULT_DENSITY_KG_M3: float = 3000.0
"""Default bulk density of a stony impactor in kg/m³."""

DEFAULT_MISS_DISTANCE_KM: float = 100000.0
"""Miss distance assumed when none is supplied, in km."""

DEFAULT_VELOCITY_KM_S: float = 20.0
"""Velocity assumed when a NeoWs record carries none, in km/s."""

DEFAULT_DIAMETER_KM: float = 0.1
"""Diameter assumed when a NeoWs record carries none, in km."""

MIN_DIAMETER_M: float = 1.0
"""Floor applied to impactor diameter in m."""

MIN_VELOCITY_KM_S: float = 1e-3
"""Floor applied to impactor velocity in km/s."""

# --- Energy ---
MEGATON_TNT_J: float = 4.184e15
"""Energy of one megaton of TNT in J."""

JOULES_TO_ERG: float = 1e7
"""Erg per joule."""

# --- Approach geometry ---
MIN_APPROACH_ANGLE_DEG: float = 15.0
MAX_APPROACH_ANGLE_DEG: float = 85.0
MAX_IMPACT_LATITUDE_DEG: float = 85.0
"""Latitude clamp that keeps impact points away from the poles."""

SIZE_ANGLE_REFERENCE_M: float = 500.0
"""Diameter at which the size contribution to approach angle saturates."""

SIZE_ANGLE_BONUS_DEG: float = 10.0
"""Maximum steepening of the approach angle due to size, in degrees."""

MAX_IMPACT_PROBABILITY: float = 0.95

# --- Atmosphere / conversions ---
STANDARD_ATMOSPHERE_PA: float = 101325.0
"""One standard atmosphere in Pa."""

MS_TO_MPH: float = 2.2369363
"""Metres per second to miles per hour."""

KM_TO_MILES: float = 0.621371

AVERAGE_OCEAN_DEPTH_M: float = 4000.0
"""Mean ocean depth used for tsunami wave speed, in m."""
