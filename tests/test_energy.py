from __future__ import annotations

import math

import pytest

from neoimpact.core.energy import (
    energy_comparison,
    floor_inputs,
    impact_frequency,
    joules_to_megatons,
    kinetic_energy,
    megatons_to_joules,
)


class TestKineticEnergy:
    def test_hundred_metre_stony_object(self):
        e = kinetic_energy(100.0, 20.0)
        mass = 3000.0 * 4.0 / 3.0 * math.pi * 50.0 ** 3
        assert e.mass_kg == pytest.approx(mass)
        assert e.kinetic_energy_j == pytest.approx(0.5 * mass * 20000.0 ** 2)
        assert e.kinetic_energy_j == pytest.approx(3.1416e17, rel=1e-4)
        assert e.megatons_tnt == pytest.approx(75.08, rel=1e-3)

    @pytest.mark.parametrize("d,v", [(1.0, 0.5), (37.0, 11.0), (1200.0, 25.0)])
    def test_diameter_cubed(self, d, v):
        assert kinetic_energy(2 * d, v).kinetic_energy_j == pytest.approx(8 * kinetic_energy(d, v).kinetic_energy_j)

    @pytest.mark.parametrize("d,v", [(1.0, 0.5), (37.0, 11.0), (1200.0, 25.0)])
    def test_velocity_squared(self, d, v):
        assert kinetic_energy(d, 2 * v).kinetic_energy_j == pytest.approx(4 * kinetic_energy(d, v).kinetic_energy_j)

    def test_density_linear(self):
        assert kinetic_energy(10.0, 10.0, density=6000.0).kinetic_energy_j == pytest.approx(
            2 * kinetic_energy(10.0, 10.0).kinetic_energy_j
        )

    def test_megaton_conversion(self):
        assert joules_to_megatons(4.184e15) == pytest.approx(1.0)
        assert megatons_to_joules(2.0) == pytest.approx(8.368e15)


def test_floor_inputs():
    assert floor_inputs(0.0, 0.0) == (1.0, 1e-3)
    assert floor_inputs(50.0, 12.0) == (50.0, 12.0)


@pytest.mark.parametrize(
    "mt,text",
    [
        (0.0005, "small conventional bomb"),
        (0.01, "Hiroshima"),
        (0.5, "WWII"),
        (20.0, "nuclear weapons"),
        (500.0, "Yellowstone"),
        (5e4, "Regional extinction"),
        (1e7, "Chicxulub"),
    ],
)
def test_energy_comparison(mt, text):
    assert text in energy_comparison(mt)


class TestImpactFrequency:
    def test_small_objects_every_few_years(self):
        f = impact_frequency(10.0)
        assert f.average_interval_years == 5.0
        assert "Chelyabinsk" in f.description

    def test_band_edges(self):
        assert impact_frequency(49.9).average_interval_years == 100.0
        assert impact_frequency(50.0).average_interval_years == 1000.0

    def test_kilometre_scale(self):
        f = impact_frequency(2000.0)
        assert f.average_interval_years == float(round(2.0 ** 2.5 * 1e6))
        assert "6 million years" in f.description
