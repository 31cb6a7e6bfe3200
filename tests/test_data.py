"""Tests for the network clients: USGS catalog, Nominatim and the narrator."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

from neoimpact.api.narrative import GroqNarrator, build_prompt
from neoimpact.core.seismic_zones import SeismicRisk
from neoimpact.data.geocoding import NominatimGeocoder, parse_reverse_response
from neoimpact.data.usgs import USGSSeismicClient

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)

LONG_REPLY = (
    "Evacuate coastal communities within fifty kilometres, pre-position rescue teams "
    "and issue tsunami warnings across the basin."
)


def _make_response(status_code: int = 200, payload=None) -> MagicMock:
    """Helper to create a mock JSON response."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.raise_for_status = MagicMock()
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(response=resp)
    return resp


def _quake(mag: float, tsunami: int = 0) -> dict:
    return {"type": "Feature", "properties": {"mag": mag, "tsunami": tsunami}}


# --- USGS ---

def test_usgs_request_parameters():
    client = USGSSeismicClient(now=NOW)
    with patch.object(
        client._session, "get", return_value=_make_response(200, {"features": []})
    ) as mock_get:
        assert client.fetch_events(35.0, 139.0) == []

    args, kwargs = mock_get.call_args
    assert args[0] == USGSSeismicClient.BASE_URL
    assert kwargs["params"]["format"] == "geojson"
    assert kwargs["params"]["maxradiuskm"] == 500.0
    assert kwargs["params"]["minmagnitude"] == 3.0
    assert kwargs["params"]["starttime"] == "2015-06-01"
    assert kwargs["timeout"] == 10.0


def test_usgs_classify_pacific():
    client = USGSSeismicClient(now=NOW)
    features = [_quake(7.8, tsunami=1)] * 3 + [_quake(4.0)] * 27
    with patch.object(client._session, "get", return_value=_make_response(200, {"features": features})):
        zone = client.classify(0.0, -150.0, 1e18, 2.0)

    assert zone.method == "earthquake_density"
    assert zone.confidence == "high"
    assert zone.events_per_year == pytest.approx(3.0)
    assert zone.max_historical_magnitude == 7.8
    assert zone.risk_level is SeismicRisk.VERY_HIGH
    assert zone.tsunami_risk == "HIGH"
    assert zone.magnitude_override is None
    assert "Tsunami waves" in zone.secondary_hazards
    assert "Major seismic shaking" in zone.secondary_hazards


def test_usgs_quiet_land_site():
    client = USGSSeismicClient(now=NOW)
    with patch.object(client._session, "get", return_value=_make_response(200, {"features": [_quake(3.2)]})):
        zone = client.classify(48.85, 2.35, 1e12, 0.05)
    assert zone.risk_level is SeismicRisk.LOW
    assert zone.tsunami_risk == "NONE"


def test_usgs_missing_features():
    client = USGSSeismicClient(now=NOW)
    with patch.object(client._session, "get", return_value=_make_response(200, {"error": "bad"})):
        with pytest.raises(ValueError, match="features"):
            client.fetch_events(0.0, 0.0)


def test_usgs_http_error():
    client = USGSSeismicClient(now=NOW)
    with patch.object(client._session, "get", return_value=_make_response(503)):
        with pytest.raises(requests.HTTPError):
            client.classify(0.0, 0.0, 1e15, 1.0)


# --- Nominatim ---

def test_parse_open_water():
    place = parse_reverse_response(0.0, -150.0, {"error": "Unable to geocode"})
    assert place.is_water is True
    assert place.water_body == "ocean"


def test_parse_city():
    data = {
        "display_name": "Paris, Île-de-France, France",
        "address": {"city": "Paris", "country": "France"},
    }
    place = parse_reverse_response(48.85, 2.35, data)
    assert place.is_water is False
    assert place.country == "France"
    assert place.display_name.startswith("Paris")


def test_parse_named_sea():
    place = parse_reverse_response(43.0, 5.0, {"display_name": "Mer", "address": {"sea": "Mediterranean Sea"}})
    assert place.is_water is True
    assert place.water_body == "sea"


def test_geocoder_request_and_cache():
    geocoder = NominatimGeocoder(user_agent="neoimpact-tests")
    body = {"display_name": "Paris, France", "address": {"city": "Paris", "country": "France"}}
    with patch.object(geocoder._session, "get", return_value=_make_response(200, body)) as mock_get:
        first = geocoder.lookup(48.85661, 2.35222)
        second = geocoder.lookup(48.85662, 2.35221)

    assert first is second
    assert mock_get.call_count == 1
    args, kwargs = mock_get.call_args
    assert args[0] == "https://nominatim.openstreetmap.org/reverse"
    assert kwargs["params"]["format"] == "json"
    assert kwargs["headers"]["User-Agent"] == "neoimpact-tests"


def test_geocoder_http_error():
    geocoder = NominatimGeocoder()
    with patch.object(geocoder._session, "get", return_value=_make_response(429)):
        with pytest.raises(requests.HTTPError):
            geocoder.lookup(10.0, 10.0)


# --- Narrator ---

SUMMARY = {
    "threat_level": "HIGH",
    "megatons_tnt": 75.0,
    "crater_diameter_km": 0.66,
    "earthquake_magnitude": 8.3,
    "tsunami_height_m": 4.0,
    "affected_radius_km": 13.3,
    "affected_population": 12000,
    "terrain": "land",
    "latitude": 48.85,
    "longitude": 2.35,
}


def _completion(text: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


def test_build_prompt():
    prompt = build_prompt(SUMMARY)
    assert "THREAT LEVEL: HIGH" in prompt
    assert "POPULATION AT RISK: 12,000" in prompt
    assert "TSUNAMI HEIGHT" not in prompt


def test_narrate_success():
    narrator = GroqNarrator(api_key="test-key")
    with patch.object(
        narrator._session, "post", return_value=_make_response(200, _completion(f"  {LONG_REPLY}\n"))
    ) as mock_post:
        assert narrator.narrate(SUMMARY) == LONG_REPLY

    args, kwargs = mock_post.call_args
    assert args[0] == "https://api.groq.com/openai/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer test-key"
    assert kwargs["json"]["model"] == "openai/gpt-oss-120b"
    assert kwargs["json"]["messages"][0]["role"] == "system"


def test_narrate_short_reply():
    narrator = GroqNarrator(api_key="test-key")
    with patch.object(narrator._session, "post", return_value=_make_response(200, _completion("Evacuate."))):
        with pytest.raises(ValueError, match="too short"):
            narrator.narrate(SUMMARY)


def test_narrate_malformed_reply():
    narrator = GroqNarrator(api_key="test-key")
    with patch.object(narrator._session, "post", return_value=_make_response(200, {"choices": []})):
        with pytest.raises(ValueError, match="Malformed"):
            narrator.narrate(SUMMARY)


def test_narrator_from_env(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "env-key")
    assert GroqNarrator.from_env(timeout=5.0).api_key == "env-key"

    monkeypatch.delenv("GROQ_API_KEY")
    with pytest.raises(ValueError, match="GROQ_API_KEY"):
        GroqNarrator.from_env()
