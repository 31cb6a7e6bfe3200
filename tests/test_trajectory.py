"""Tests for object parameters and impact-point prediction."""

from __future__ import annotations

import math
from datetime import datetime, timezone

import numpy as np
import pytest

from neoimpact.core.geography import Terrain
from neoimpact.core.trajectory import (
    ObjectParameters,
    TrajectoryPredictor,
    approach_angle_deg,
    estimate_orbital_elements,
    impact_probability,
    impact_velocity,
    julian_centuries_since_j2000,
    orbit_summary,
    time_to_impact_hours,
)
from neoimpact.utils.constants import AU_KM, EARTH_MU_KM3_S2, EARTH_RADIUS_KM

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def params():
    return ObjectParameters(diameter_m=150.0, velocity_km_s=18.0, miss_distance_km=250000.0)


class TestObjectParameters:
    def test_defaults(self):
        p = ObjectParameters(diameter_m=50.0, velocity_km_s=12.0)
        assert p.density_kg_m3 == 3000.0
        assert p.miss_distance_km == 100000.0
        assert not p.has_location_override

    @pytest.mark.parametrize("field", ["diameter_m", "velocity_km_s", "density_kg_m3", "miss_distance_km"])
    def test_negative_rejected(self, field):
        kwargs = {"diameter_m": 10.0, "velocity_km_s": 10.0, field: -1.0}
        with pytest.raises(ValueError, match=field):
            ObjectParameters(**kwargs)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf")])
    def test_non_finite_rejected(self, bad):
        with pytest.raises(ValueError, match="finite"):
            ObjectParameters(diameter_m=bad, velocity_km_s=10.0)

    def test_zero_allowed_at_boundary(self):
        p = ObjectParameters(diameter_m=0.0, velocity_km_s=0.0)
        assert p.diameter_m == 0.0

    def test_partial_override_rejected(self):
        with pytest.raises(ValueError, match="together"):
            ObjectParameters(diameter_m=10.0, velocity_km_s=10.0, latitude=10.0)

    def test_from_neo_record(self):
        record = {
            "id": "3542519",
            "name": "(2010 PK9)",
            "estimated_diameter": {"kilometers": {"estimated_diameter_max": 0.25}},
            "close_approach_data": [
                {
                    "relative_velocity": {"kilometers_per_second": "14.5"},
                    "miss_distance": {"kilometers": "4500000.0"},
                }
            ],
        }
        p = ObjectParameters.from_neo_record(record)
        assert p.diameter_m == pytest.approx(250.0)
        assert p.velocity_km_s == pytest.approx(14.5)
        assert p.miss_distance_km == pytest.approx(4.5e6)
        assert p.name == "(2010 PK9)"
        assert p.object_id == "3542519"

    def test_from_neo_record_fallbacks(self):
        p = ObjectParameters.from_neo_record({})
        assert p.diameter_m == pytest.approx(100.0)
        assert p.velocity_km_s == 20.0
        assert p.miss_distance_km == 100000.0


class TestKinematics:
    def test_impact_velocity_not_below_input(self):
        for v in (0.001, 5.0, 20.0, 70.0):
            for d in (0.0, 1000.0, 1e5, 1e8):
                assert impact_velocity(v, d) >= v

    def test_impact_velocity_at_surface(self):
        assert impact_velocity(20.0, EARTH_RADIUS_KM) == pytest.approx(math.hypot(20.0, 11.2))

    def test_time_to_impact_matches_quadratic(self):
        d, v0 = 100000.0, 20.0
        a = EARTH_MU_KM3_S2 / d ** 2
        naive = (-v0 + math.sqrt(v0 ** 2 + 2 * a * d)) / a
        assert time_to_impact_hours(d, v0) == pytest.approx(naive / 3600.0, rel=1e-9)

    def test_time_to_impact_zero_distance(self):
        assert time_to_impact_hours(0.0, 20.0) == 0.0

    def test_time_to_impact_stable_for_huge_distance(self):
        hours = time_to_impact_hours(5e7, 30.0)
        assert hours == pytest.approx(5e7 / 30.0 / 3600.0, rel=1e-3)

    def test_impact_probability_bounds(self):
        assert impact_probability(0.0, 1000.0) == 0.95
        assert impact_probability(2e6, 0.0) == 0.0
        assert impact_probability(5e5, 500.0) == pytest.approx(0.3 * 0.5 + 0.7 * 0.5)

    def test_approach_angle_clamped(self):
        assert approach_angle_deg(0.0, 0.0) == 15.0
        assert approach_angle_deg(1000.0, 1000.0) == 85.0

    def test_approach_angle_increases_with_speed_and_size(self):
        assert approach_angle_deg(15.0, 100.0) < approach_angle_deg(25.0, 100.0)
        assert approach_angle_deg(15.0, 100.0) < approach_angle_deg(15.0, 400.0)


class TestOrbitalElements:
    def test_ranges(self):
        rng = np.random.default_rng(11)
        for _ in range(50):
            el = estimate_orbital_elements(20.0, 1e5, rng, NOW)
            assert 0.1 <= el.eccentricity < 0.6
            assert 0.0 <= el.inclination_rad < math.radians(30.0)
            assert 0.0 <= el.mean_anomaly_rad < 2 * math.pi
            assert el.semi_major_axis_km > 0

    def test_vis_viva_bound_orbit(self):
        r, v = 50000.0, 2.0
        el = estimate_orbital_elements(v, r, np.random.default_rng(0), NOW)
        assert el.semi_major_axis_km == pytest.approx(1.0 / (2.0 / r - v ** 2 / EARTH_MU_KM3_S2))

    def test_epoch_at_j2000_is_zero(self):
        j2000 = datetime(2000, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert julian_centuries_since_j2000(j2000) == pytest.approx(0.0, abs=1e-9)

    def test_orbit_summary(self):
        el = estimate_orbital_elements(20.0, 1e5, np.random.default_rng(1), NOW)
        s = orbit_summary(el)
        a, e = el.semi_major_axis_km, el.eccentricity
        assert s.perihelion_km == pytest.approx(a * (1 - e))
        assert s.aphelion_km == pytest.approx(a * (1 + e))
        assert s.period_years == pytest.approx((a / AU_KM) ** 1.5)


class TestTrajectoryPredictor:
    def test_same_seed_same_geometry(self, params):
        t1 = TrajectoryPredictor(seed=42, now=NOW).predict(params)
        t2 = TrajectoryPredictor(seed=42, now=NOW).predict(params)
        assert t1.geometry == t2.geometry
        assert t1.elements == t2.elements
        np.testing.assert_array_equal(t1.state.position_km, t2.state.position_km)

    def test_injected_generator(self, params):
        t1 = TrajectoryPredictor(rng=np.random.default_rng(5), now=NOW).predict(params)
        t2 = TrajectoryPredictor(seed=5, now=NOW).predict(params)
        assert t1.geometry == t2.geometry

    def test_geometry_bounds(self, params):
        for seed in range(40):
            g = TrajectoryPredictor(seed=seed, now=NOW).predict(params).geometry
            assert -85.0 <= g.latitude <= 85.0
            assert -180.0 <= g.longitude < 180.0
            assert 15.0 <= g.approach_angle_deg <= 85.0
            assert g.impact_velocity_km_s >= params.velocity_km_s
            assert isinstance(g.terrain, Terrain)
            assert g.population_density >= 0.0

    def test_location_override(self):
        p = ObjectParameters(diameter_m=50.0, velocity_km_s=15.0, latitude=10.0, longitude=200.0)
        g = TrajectoryPredictor(seed=0, now=NOW).predict(p).geometry
        assert g.latitude == 10.0
        assert g.longitude == pytest.approx(-160.0)

    def test_ocean_override_has_zero_elevation(self):
        p = ObjectParameters(diameter_m=50.0, velocity_km_s=15.0, latitude=0.0, longitude=-150.0)
        g = TrajectoryPredictor(seed=0, now=NOW).predict(p).geometry
        assert g.terrain is Terrain.OCEAN
        assert g.ocean_name == "Pacific Ocean"
        assert g.elevation_m == 0.0

    def test_trajectory_fields(self, params):
        t = TrajectoryPredictor(seed=3, now=NOW).predict(params)
        assert t.time_to_impact_hours > 0
        assert 0.0 <= t.impact_probability <= 0.95
        assert t.geometry.nearest_city is not None
