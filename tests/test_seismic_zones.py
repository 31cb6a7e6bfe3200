"""Tests for the offline tectonic zone lookup."""

from __future__ import annotations

import pytest

from neoimpact.core.seismic_zones import (
    STABLE_REGION,
    SeismicRisk,
    TectonicZoneLookup,
    identify_tectonic_region,
    risk_from_history,
    secondary_hazards,
    tsunami_risk,
)


@pytest.mark.parametrize(
    "lat,lon,name",
    [
        (35.7, 139.7, "Japan Trench Subduction Zone"),
        (37.7, -122.4, "San Andreas Fault System"),
        (40.0, 30.0, "Anatolian Fault System"),
        (-33.4, -70.6, "Pacific Ring of Fire"),
        (64.5, -18.0, "Mid-Atlantic Ridge"),
        (-1.3, 36.8, "East African Rift"),
        (28.0, 85.0, "Alpide Belt"),
        (0.0, 0.0, "Stable Continental Region"),
    ],
)
def test_identify_region(lat, lon, name):
    assert identify_tectonic_region(lat, lon).name == name


def test_stable_region_is_low_risk():
    assert STABLE_REGION.risk_level is SeismicRisk.LOW


@pytest.mark.parametrize(
    "rate,mag,level",
    [
        (60.0, 5.0, SeismicRisk.VERY_HIGH),
        (1.0, 7.6, SeismicRisk.VERY_HIGH),
        (25.0, 5.0, SeismicRisk.HIGH),
        (1.0, 6.6, SeismicRisk.HIGH),
        (6.0, 4.0, SeismicRisk.MODERATE),
        (5.0, 5.5, SeismicRisk.LOW),
    ],
)
def test_risk_from_history(rate, mag, level):
    assert risk_from_history(rate, mag)[0] is level


@pytest.mark.parametrize("events,label", [(0, "LOW"), (1, "MODERATE"), (3, "HIGH"), (6, "EXTREME")])
def test_tsunami_risk_at_sea(events, label):
    assert tsunami_risk(True, events) == label


def test_tsunami_risk_on_land():
    assert tsunami_risk(False, 10) == "NONE"


def test_secondary_hazards():
    hazards = secondary_hazards(6.0, SeismicRisk.HIGH, 2.0, 1e19, "EXTREME")
    assert hazards == (
        "Major seismic shaking",
        "Tsunami waves",
        "Potential fault activation",
        "Ejecta blanket",
        "Atmospheric disturbance",
    )
    assert secondary_hazards(1.0, SeismicRisk.LOW, 0.1, 1e10) == ()


def test_lookup_classify():
    zone = TectonicZoneLookup().classify(37.7, -122.4, 1e17, 0.5)
    assert zone.zone_name == "San Andreas Fault System"
    assert zone.risk_level is SeismicRisk.HIGH
    assert zone.method == "tectonic_boundaries"
    assert zone.magnitude_override is None
    assert "Potential fault activation" in zone.secondary_hazards
