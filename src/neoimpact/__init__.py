"""
neoimpact — Near-Earth object impact consequence estimation.

Turns coarse object parameters (size, velocity, miss distance) into an
impact site, impact energy, crater, thermal, blast, wind, seismic and
tsunami effects, and casualty and economic estimates. Orbital mechanics
is a single-conic illustration, not mission-grade propagation.
"""

from __future__ import annotations

__version__ = "0.1.0-dev"

from neoimpact.core.kepler import OrbitalElements, StateVector, solve_kepler, compute_state
from neoimpact.core.geography import GeographyConfig, Terrain
from neoimpact.core.trajectory import ObjectParameters, ImpactGeometry, Trajectory, TrajectoryPredictor
from neoimpact.core.energy import EnergyProfile, kinetic_energy
from neoimpact.core.effects import EffectZone, ImpactEffects, compute_effects
from neoimpact.core.casualties import CasualtyBreakdown, estimate_casualties
from neoimpact.core.seismic_zones import SeismicZone, TectonicZoneLookup
from neoimpact.core.mitigation import ThreatLevel
from neoimpact.core.consequence import (
    ConsequenceAssessment,
    ConsequenceOrchestrator,
    classify_threat,
    economic_damage,
)
from neoimpact.data.geocoding import NominatimGeocoder, PlaceInfo
from neoimpact.data.usgs import USGSSeismicClient
from neoimpact.api.narrative import GroqNarrator

__all__ = [
    "__version__",
    "OrbitalElements",
    "StateVector",
    "solve_kepler",
    "compute_state",
    "GeographyConfig",
    "Terrain",
    "ObjectParameters",
    "ImpactGeometry",
    "Trajectory",
    "TrajectoryPredictor",
    "EnergyProfile",
    "kinetic_energy",
    "EffectZone",
    "ImpactEffects",
    "compute_effects",
    "CasualtyBreakdown",
    "estimate_casualties",
    "SeismicZone",
    "TectonicZoneLookup",
    "ThreatLevel",
    "ConsequenceAssessment",
    "ConsequenceOrchestrator",
    "classify_threat",
    "economic_damage",
    "NominatimGeocoder",
    "PlaceInfo",
    "USGSSeismicClient",
    "GroqNarrator",
]
