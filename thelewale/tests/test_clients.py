from __future__ import annotations

from unittest.mock import patch

import pytest
import requests
from fastapi.testclient import TestClient

from thelewale.app import app
from thelewale.places import client as places_client
from thelewale.weather import client as weather_client
from thelewale.weather.client import WeatherReading, suggest_food
from thelewale.weather.config import WeatherConfig


class DummyResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class DummySession:
    def __init__(self):
        self.calls = []
        self.response = DummyResponse(payload={})

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append((url, params, headers, timeout))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def weather_session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(weather_client, "_SESSION", session)
    return session


@pytest.fixture
def places_session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(places_client, "_SESSION", session)
    return session


# ── Weather ──────────────────────────────────────────────────────────────


def test_current_weather_success(weather_session):
    weather_session.response = DummyResponse(
        payload={"current": {"temperature_2m": 33.5, "relative_humidity_2m": 48}},
    )
    reading = weather_client.current_weather(28.61, 77.21, WeatherConfig(enabled=True))
    assert reading == WeatherReading(temperature_c=33.5, humidity_pct=48.0)
    url, params, _, timeout = weather_session.calls[0]
    assert params["latitude"] == 28.61
    assert "temperature_2m" in params["current"]
    assert timeout == 10.0


def test_current_weather_http_error(weather_session):
    weather_session.response = DummyResponse(status_code=503)
    with pytest.raises(weather_client.WeatherLookupError):
        weather_client.current_weather(28.61, 77.21, WeatherConfig(enabled=True))


def test_current_weather_network_error(weather_session):
    weather_session.response = requests.ConnectionError("offline")
    with pytest.raises(weather_client.WeatherLookupError):
        weather_client.current_weather(28.61, 77.21, WeatherConfig(enabled=True))


def test_current_weather_missing_fields(weather_session):
    weather_session.response = DummyResponse(payload={"current": {}})
    with pytest.raises(weather_client.WeatherLookupError):
        weather_client.current_weather(28.61, 77.21, WeatherConfig(enabled=True))


def test_current_weather_disabled(weather_session):
    with pytest.raises(weather_client.WeatherLookupError):
        weather_client.current_weather(28.61, 77.21, WeatherConfig(enabled=False))
    assert weather_session.calls == []


@pytest.mark.parametrize(
    "temperature, humidity, keyword",
    [
        (38.0, 30.0, "kulfi"),
        (12.0, 50.0, "chai"),
        (25.0, 85.0, "golgappa"),
        (25.0, 40.0, "chaat"),
    ],
)
def test_suggest_food(temperature, humidity, keyword):
    assert keyword in suggest_food(WeatherReading(temperature, humidity))


@patch("thelewale.app.current_weather", return_value=WeatherReading(35.0, 40.0))
def test_weather_endpoint(mock_weather):
    body = TestClient(app).get("/weather", params={"lat": 28.61, "lng": 77.21}).json()
    assert body["temperature_c"] == 35.0
    assert body["humidity_pct"] == 40.0
    assert "kulfi" in body["suggestion"]


@patch(
    "thelewale.app.current_weather",
    side_effect=weather_client.WeatherLookupError("down"),
)
def test_weather_endpoint_upstream_failure(mock_weather):
    resp = TestClient(app).get("/weather", params={"lat": 28.61, "lng": 77.21})
    assert resp.status_code == 502


def test_weather_endpoint_requires_coordinates():
    assert TestClient(app).get("/weather").status_code == 422


# ── Places ───────────────────────────────────────────────────────────────


def test_suggest_places(places_session):
    places_session.response = DummyResponse(payload=[
        {"display_name": "Chandni Chowk, Delhi", "lat": "28.65", "lon": "77.23"},
        {"display_name": "Chandigarh, India", "lat": "30.73", "lon": "76.77"},
    ])
    assert places_client.suggest_places("chand") == [
        "Chandni Chowk, Delhi", "Chandigarh, India",
    ]
    url, params, headers, _ = places_session.calls[0]
    assert url.endswith("/search")
    assert params == {"q": "chand", "format": "json", "limit": 5}
    assert headers["User-Agent"]


def test_suggest_places_blank_query(places_session):
    assert places_client.suggest_places("  ") == []
    assert places_session.calls == []


def test_geocode(places_session):
    places_session.response = DummyResponse(payload=[
        {"display_name": "Chandni Chowk, Delhi", "lat": "28.65", "lon": "77.23"},
    ])
    coord = places_client.geocode("Chandni Chowk")
    assert (coord.latitude, coord.longitude) == (28.65, 77.23)
    assert places_session.calls[0][1]["limit"] == 1


def test_geocode_no_match(places_session):
    places_session.response = DummyResponse(payload=[])
    assert places_client.geocode("Atlantis") is None


def test_geocode_malformed_result(places_session):
    places_session.response = DummyResponse(payload=[{"display_name": "Nowhere"}])
    with pytest.raises(places_client.PlaceLookupError):
        places_client.geocode("Nowhere")


def test_place_search_bad_json(places_session):
    places_session.response = DummyResponse(payload=ValueError("not json"))
    with pytest.raises(places_client.PlaceLookupError):
        places_client.suggest_places("delhi")


def test_place_search_unexpected_payload(places_session):
    places_session.response = DummyResponse(payload={"error": "rate limited"})
    with pytest.raises(places_client.PlaceLookupError):
        places_client.suggest_places("delhi")


def test_places_suggest_endpoint_degrades_to_empty(places_session):
    places_session.response = DummyResponse(status_code=429)
    body = TestClient(app).get("/places/suggest", params={"q": "delhi"}).json()
    assert body == {"suggestions": []}
