"""End-to-end impact consequence assessment.

Runs trajectory prediction, energy, effect scaling and casualty
estimation for one object, then layers on optional enrichments
(reverse geocoding, seismic history, LLM narrative). Enrichments are
time-boxed; a failed or slow one is logged, recorded in
``ConsequenceAssessment.degraded`` and skipped.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Protocol, Sequence

import numpy as np

from neoimpact.core.casualties import CasualtyBreakdown, DensityProfile, estimate_casualties, round_half_up
from neoimpact.core.effects import ImpactEffects, compute_effects, felt_radius_km
from neoimpact.core.energy import (
    EnergyProfile,
    ImpactFrequency,
    energy_comparison,
    floor_inputs,
    impact_frequency,
    kinetic_energy,
)
from neoimpact.core.geography import Terrain
from neoimpact.core.mitigation import ThreatLevel, mitigation_strategies, quick_analysis
from neoimpact.core.seismic_zones import SeismicZone
from neoimpact.core.trajectory import ImpactGeometry, ObjectParameters, Trajectory, TrajectoryPredictor
from neoimpact.data.geocoding import PlaceInfo

logger = logging.getLogger(__name__)

# (USD millions per affected person, USD millions per km of crater)
ECONOMIC_COEFFICIENTS: dict[Terrain, tuple[float, float]] = {
    Terrain.CITY: (0.2, 50.0),
    Terrain.OCEAN: (0.1, 10.0),
    Terrain.LAND: (0.08, 10.0),
    Terrain.MOUNTAIN: (0.02, 5.0),
    Terrain.DESERT: (0.02, 5.0),
}

MIN_AFFECTED_RADIUS_KM = 5.0
AFFECTED_RADIUS_CRATER_FACTOR = 20.0


class PopulationProvider(Protocol):
    def lookup(self, lat: float, lon: float) -> PlaceInfo: ...


class SeismicZoneProvider(Protocol):
    def classify(self, lat: float, lon: float, energy_j: float, crater_diameter_km: float) -> SeismicZone: ...


class Narrator(Protocol):
    def narrate(self, summary: dict[str, Any]) -> str: ...


def classify_threat(megatons: float) -> ThreatLevel:
    """Threat level from impact energy in megatons."""
    if megatons < 0.01:
        return ThreatLevel.LOW
    if megatons < 1.0:
        return ThreatLevel.MODERATE
    if megatons < 100.0:
        return ThreatLevel.HIGH
    return ThreatLevel.CATASTROPHIC


def economic_damage(terrain: Terrain | str, affected_population: float, crater_diameter_km: float) -> float:
    """Direct economic loss in billions of USD.

    Linear in affected population and crater size with terrain-dependent
    coefficients from ``ECONOMIC_COEFFICIENTS``.
    """
    per_person, per_km = ECONOMIC_COEFFICIENTS[Terrain(terrain)]
    millions = per_person * max(affected_population, 0.0) + per_km * max(crater_diameter_km, 0.0)
    return millions / 1000.0


def _to_plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class ConsequenceAssessment:
    """Complete consequence estimate for one object.

    Attributes:
        params: Floored input parameters.
        trajectory: Impact geometry and orbit details.
        energy: Kinetic energy and TNT equivalent.
        effects: Crater, thermal, blast, wind, seismic and tsunami effects.
        casualties: Fatalities by cause.
        threat_level: Overall threat category.
        economic_damage_billion_usd: Direct economic loss estimate.
        affected_population: People inside the outermost wind-damage zone.
        affected_radius_km: Radius of significant damage.
        energy_comparison: Everyday comparison for the energy.
        frequency: How often impacts of this size occur.
        quick_analysis: One-sentence summary.
        mitigation: Offline mitigation paragraph.
        seismic_zone: Seismic setting, if a provider answered.
        narrative: LLM mitigation paragraph, if a narrator answered.
        degraded: Names of enrichments that failed or timed out.
    """

    params: ObjectParameters
    trajectory: Trajectory
    energy: EnergyProfile
    effects: ImpactEffects
    casualties: CasualtyBreakdown
    threat_level: ThreatLevel
    economic_damage_billion_usd: float
    affected_population: int
    affected_radius_km: float
    energy_comparison: str
    frequency: ImpactFrequency
    quick_analysis: str
    mitigation: str
    seismic_zone: SeismicZone | None = None
    narrative: str | None = None
    degraded: tuple[str, ...] = field(default_factory=tuple)

    @property
    def geometry(self) -> ImpactGeometry:
        return self.trajectory.geometry

    def summary(self) -> dict[str, Any]:
        """Flat numeric summary, as passed to a narrator."""
        geometry = self.trajectory.geometry
        return {
            "threat_level": self.threat_level.value,
            "megatons_tnt": self.energy.megatons_tnt,
            "crater_diameter_km": self.effects.crater_diameter_km,
            "earthquake_magnitude": self.effects.earthquake_magnitude,
            "tsunami_height_m": self.effects.tsunami_height_m,
            "affected_radius_km": self.affected_radius_km,
            "affected_population": self.affected_population,
            "total_casualties": self.casualties.total,
            "total_injuries": self.casualties.injuries,
            "terrain": geometry.terrain.value,
            "latitude": geometry.latitude,
            "longitude": geometry.longitude,
            "hours_to_impact": self.trajectory.time_to_impact_hours,
            "energy_comparison": self.energy_comparison,
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain Python types (enums to values, arrays to lists)."""
        record = _to_plain(self)
        record["zones"] = _to_plain(self.effects.zones())
        return record


class ConsequenceOrchestrator:
    """Sequences the physics pipeline and optional enrichments.

    Args:
        predictor: Trajectory predictor; a fresh unseeded one by default.
        seismic: Optional seismic zone provider.
        geocoder: Optional population / place provider.
        narrator: Optional narrative generator.
        enrichment_timeout_s: Upper bound on each enrichment call.
        density_profile: Optional radial population profile for casualties.

    Example::

        orchestrator = ConsequenceOrchestrator(
            predictor=TrajectoryPredictor(seed=7),
            seismic=TectonicZoneLookup(),
        )
        assessment = orchestrator.assess(ObjectParameters(diameter_m=120, velocity_km_s=19))
    """

    def __init__(
        self,
        predictor: TrajectoryPredictor | None = None,
        seismic: SeismicZoneProvider | None = None,
        geocoder: PopulationProvider | None = None,
        narrator: Narrator | None = None,
        enrichment_timeout_s: float = 10.0,
        density_profile: DensityProfile | None = None,
    ) -> None:
        self.predictor = predictor if predictor is not None else TrajectoryPredictor()
        self.seismic = seismic
        self.geocoder = geocoder
        self.narrator = narrator
        self.enrichment_timeout_s = enrichment_timeout_s
        self.density_profile = density_profile

    def assess(self, params: ObjectParameters) -> ConsequenceAssessment:
        """Assess the consequences of one impact.

        Args:
            params: Object parameters.

        Returns:
            ConsequenceAssessment. Always complete, even if every
            enrichment fails.
        """
        return self._assess(params, self.predictor)

    def assess_many(
        self,
        params_list: Sequence[ObjectParameters],
        max_workers: int | None = None,
    ) -> list[ConsequenceAssessment]:
        """Assess several objects in parallel.

        Each object gets its own predictor seeded from this orchestrator's
        generator, so results do not depend on thread scheduling.

        Returns:
            Assessments in input order.
        """
        base = self.predictor
        seeds = base.rng.integers(0, 2**63 - 1, size=len(params_list))
        predictors = [
            TrajectoryPredictor(seed=int(s), config=base.config, now=base.now) for s in seeds
        ]
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self._assess, params_list, predictors))

    def _assess(self, params: ObjectParameters, predictor: TrajectoryPredictor) -> ConsequenceAssessment:
        degraded: list[str] = []

        diameter_m, velocity_km_s = floor_inputs(params.diameter_m, params.velocity_km_s)
        params = replace(params, diameter_m=diameter_m, velocity_km_s=velocity_km_s)

        trajectory = predictor.predict(params)
        geometry = trajectory.geometry

        if self.geocoder is not None:
            place = self._enrich("geocoder", degraded, self.geocoder.lookup, geometry.latitude, geometry.longitude)
            if place is not None and not _is_non_negative(place.population_density):
                logger.warning("Enrichment geocoder returned invalid density: %r", place.population_density)
                degraded.append("geocoder")
                place = replace(place, population_density=None)
            if place is not None:
                geometry = _apply_place(geometry, place)
                trajectory = replace(trajectory, geometry=geometry)

        energy = kinetic_energy(diameter_m, velocity_km_s, params.density_kg_m3)
        effects = compute_effects(
            energy, geometry.terrain, geometry.impact_velocity_km_s, geometry.latitude, geometry.longitude,
        )

        zone = None
        if self.seismic is not None:
            zone = self._enrich(
                "seismic", degraded, self.seismic.classify,
                geometry.latitude, geometry.longitude, energy.kinetic_energy_j, effects.crater_diameter_km,
            )
            if zone is not None and not _is_non_negative(zone.magnitude_override):
                logger.warning("Enrichment seismic returned invalid magnitude: %r", zone.magnitude_override)
                degraded.append("seismic")
                zone = replace(zone, magnitude_override=None)
            if zone is not None and zone.magnitude_override is not None:
                effects = replace(
                    effects,
                    earthquake_magnitude=zone.magnitude_override,
                    felt_radius_km=felt_radius_km(zone.magnitude_override),
                )

        casualties = estimate_casualties(
            geometry.population_density,
            effects.zones(),
            effects.earthquake_magnitude,
            effects.felt_radius_km,
            self.density_profile,
        )

        threat = classify_threat(energy.megatons_tnt)
        affected_radius = max(effects.crater_diameter_km * AFFECTED_RADIUS_CRATER_FACTOR, MIN_AFFECTED_RADIUS_KM)
        affected_population = round_half_up(
            geometry.population_density * np.pi * effects.trees_knocked_radius_km ** 2
        )

        assessment = ConsequenceAssessment(
            params=params,
            trajectory=trajectory,
            energy=energy,
            effects=effects,
            casualties=casualties,
            threat_level=threat,
            economic_damage_billion_usd=economic_damage(
                geometry.terrain, affected_population, effects.crater_diameter_km,
            ),
            affected_population=affected_population,
            affected_radius_km=affected_radius,
            energy_comparison=energy_comparison(energy.megatons_tnt),
            frequency=impact_frequency(diameter_m),
            quick_analysis=quick_analysis(threat, diameter_m, energy.megatons_tnt, affected_population),
            mitigation=mitigation_strategies(
                threat,
                megatons=energy.megatons_tnt,
                affected_radius_km=affected_radius,
                latitude=geometry.latitude,
                longitude=geometry.longitude,
                terrain=geometry.terrain.value,
                hours_to_impact=trajectory.time_to_impact_hours,
                earthquake_magnitude=effects.earthquake_magnitude,
                tsunami_height_m=effects.tsunami_height_m,
                population_at_risk=affected_population,
            ),
            seismic_zone=zone,
        )

        if self.narrator is not None:
            narrative = self._enrich("narrator", degraded, self.narrator.narrate, assessment.summary())
            if narrative is not None:
                assessment = replace(assessment, narrative=narrative)

        if degraded:
            assessment = replace(assessment, degraded=tuple(degraded))

        logger.debug(
            "Assessment %s: %.4g MT, %s, %d casualties, degraded=%s",
            params.name or params.object_id or "-", energy.megatons_tnt, threat.value,
            casualties.total, degraded,
        )
        return assessment

    def _enrich(self, name: str, degraded: list[str], fn: Callable[..., Any], *args: Any) -> Any:
        """Run one enrichment with a deadline; None if it fails or times out."""
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"neoimpact-{name}")
        future = executor.submit(fn, *args)
        try:
            return future.result(timeout=self.enrichment_timeout_s)
        except FuturesTimeoutError:
            logger.warning("Enrichment %s timed out after %.1f s", name, self.enrichment_timeout_s)
        except Exception as exc:
            logger.warning("Enrichment %s failed: %s", name, exc)
        finally:
            # Do not wait for a stuck call
            executor.shutdown(wait=False, cancel_futures=True)
        degraded.append(name)
        return None


def _is_non_negative(value: float | None) -> bool:
    """True for None or a finite number >= 0."""
    if value is None:
        return True
    try:
        return math.isfinite(value) and value >= 0.0
    except TypeError:
        return False


def _apply_place(geometry: ImpactGeometry, place: PlaceInfo) -> ImpactGeometry:
    updates: dict[str, Any] = {}
    if place.display_name:
        updates["place_name"] = place.display_name
    if place.population_density is not None:
        updates["population_density"] = place.population_density
    if place.is_water is True and geometry.terrain is not Terrain.OCEAN:
        updates["terrain"] = Terrain.OCEAN
        updates["elevation_m"] = 0.0
    elif place.is_water is False and geometry.terrain is Terrain.OCEAN:
        updates["terrain"] = Terrain.LAND
        updates["ocean_name"] = None
    return replace(geometry, **updates) if updates else geometry
