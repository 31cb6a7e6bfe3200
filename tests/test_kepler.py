"""Tests for the Kepler solver and state conversion."""

from __future__ import annotations

import math

import numpy as np
import pytest

from neoimpact.core.kepler import (
    OrbitalElements,
    compute_state,
    ecliptic_to_equatorial,
    orbital_plane_velocity,
    perifocal_to_ecliptic,
    solve_kepler,
    true_anomaly,
)
from neoimpact.utils.constants import EARTH_MU_KM3_S2, EARTH_OBLIQUITY_DEG


class TestSolveKepler:
    def test_circular_orbit_converges_immediately(self):
        sol = solve_kepler(1.2, 0.0)
        assert sol.eccentric_anomaly == pytest.approx(1.2, abs=1e-15)
        assert sol.iterations == 1
        assert sol.converged

    @pytest.mark.parametrize("e", [0.1, 0.3, 0.5, 0.7, 0.9])
    @pytest.mark.parametrize("M", [0.0, 0.5, 1.5, 3.0, 5.5])
    def test_solution_satisfies_equation(self, M, e):
        sol = solve_kepler(M, e)
        assert sol.converged
        E = sol.eccentric_anomaly
        assert E - e * math.sin(E) == pytest.approx(M, abs=1e-6)

    def test_iteration_cap_returns_best_estimate(self):
        """Hitting the cap must not raise."""
        sol = solve_kepler(0.1, 0.9, max_iterations=1)
        assert sol.iterations == 1
        assert not sol.converged
        assert math.isfinite(sol.eccentric_anomaly)

    def test_never_exceeds_cap(self):
        sol = solve_kepler(2.0, 0.95, tolerance=0.0, max_iterations=30)
        assert sol.iterations <= 30


class TestAnomalies:
    def test_true_anomaly_equals_eccentric_for_circle(self):
        assert true_anomaly(0.8, 0.0) == pytest.approx(0.8)

    def test_true_anomaly_at_periapsis_and_apoapsis(self):
        assert true_anomaly(0.0, 0.5) == pytest.approx(0.0)
        assert abs(true_anomaly(math.pi, 0.5)) == pytest.approx(math.pi)


class TestRotations:
    def test_perifocal_matrix_is_orthonormal(self):
        R = perifocal_to_ecliptic(0.4, 0.3, 1.1)
        np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)
        assert np.linalg.det(R) == pytest.approx(1.0)

    def test_identity_for_zero_angles(self):
        np.testing.assert_allclose(perifocal_to_ecliptic(0.0, 0.0, 0.0), np.eye(3), atol=1e-15)

    def test_obliquity_rotation_about_x(self):
        R = ecliptic_to_equatorial()
        eps = math.radians(EARTH_OBLIQUITY_DEG)
        v = R @ np.array([0.0, 1.0, 0.0])
        np.testing.assert_allclose(v, [0.0, math.cos(eps), math.sin(eps)], atol=1e-12)


class TestComputeState:
    def test_circular_orbit_radius_and_speed(self):
        a = 10000.0
        elements = OrbitalElements(
            semi_major_axis_km=a,
            eccentricity=0.0,
            inclination_rad=0.0,
            longitude_of_node_rad=0.0,
            argument_of_perihelion_rad=0.0,
            mean_anomaly_rad=0.7,
        )
        state = compute_state(elements)
        assert np.linalg.norm(state.position_km) == pytest.approx(a)
        assert np.linalg.norm(state.velocity_km_s) == pytest.approx(math.sqrt(EARTH_MU_KM3_S2 / a))
        assert state.converged

    def test_velocity_perpendicular_on_circle(self):
        v = orbital_plane_velocity(8000.0, 0.0, 0.0)
        assert v[0] == pytest.approx(0.0, abs=1e-12)
        assert v[1] > 0

    def test_periapsis_distance(self):
        elements = OrbitalElements(
            semi_major_axis_km=20000.0,
            eccentricity=0.5,
            inclination_rad=0.2,
            longitude_of_node_rad=1.0,
            argument_of_perihelion_rad=2.0,
            mean_anomaly_rad=0.0,
        )
        state = compute_state(elements)
        assert np.linalg.norm(state.position_km) == pytest.approx(10000.0)
