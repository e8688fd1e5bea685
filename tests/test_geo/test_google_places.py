"""Tests for the Google Places gateway (mocked upstream)."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from mapcomposer.errors import ServiceNotConfiguredError, UpstreamError
from mapcomposer.geo.google_places import GEOCODE_URL, GooglePlacesClient


def _json_handler(payload: dict, status_code: int = 200, seen: list | None = None):
    def _handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload)

    return _handler


def _call(handler, method: str, *args, api_key: str = "test-key"):
    async def _run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            places = GooglePlacesClient(api_key, client)
            return await getattr(places, method)(*args)

    return asyncio.run(_run())


GEOCODE_OK = {
    "status": "OK",
    "results": [{"geometry": {"location": {"lat": 37.422, "lng": -122.084}}}],
}

NEARBY_OK = {
    "status": "OK",
    "results": [
        {
            "name": "Shoreline Park",
            "geometry": {"location": {"lat": 37.43, "lng": -122.08}},
            "vicinity": "Mountain View",
            "rating": 4.6,
            "types": ["park", "point_of_interest"],
        },
        {
            "name": "Unrated Spot",
            "geometry": {"location": {"lat": 37.44, "lng": -122.09}},
        },
    ],
}


class TestGeocode:
    def test_returns_first_result(self):
        seen: list[httpx.Request] = []
        coords = _call(_json_handler(GEOCODE_OK, seen=seen), "geocode", "1600 Amphitheatre Pkwy")
        assert (coords.lat, coords.lng) == (37.422, -122.084)
        assert str(seen[0].url).startswith(GEOCODE_URL)
        assert seen[0].url.params["key"] == "test-key"
        assert seen[0].url.params["address"] == "1600 Amphitheatre Pkwy"

    def test_zero_results(self):
        with pytest.raises(UpstreamError, match="ZERO_RESULTS"):
            _call(_json_handler({"status": "ZERO_RESULTS", "results": []}), "geocode", "nowhere")

    def test_http_error(self):
        with pytest.raises(UpstreamError):
            _call(_json_handler({}, status_code=500), "geocode", "anywhere")

    def test_missing_key(self):
        with pytest.raises(ServiceNotConfiguredError):
            _call(_json_handler(GEOCODE_OK), "geocode", "anywhere", api_key="")


class TestAutocomplete:
    def test_parses_predictions(self):
        payload = {
            "status": "OK",
            "predictions": [
                {"place_id": "abc", "description": "1600 Amphitheatre Pkwy, Mountain View"},
                {"place_id": "def", "description": "1600 Pennsylvania Ave, Washington"},
            ],
        }
        seen: list[httpx.Request] = []
        suggestions = _call(_json_handler(payload, seen=seen), "autocomplete", "1600")
        assert [s.place_id for s in suggestions] == ["abc", "def"]
        assert seen[0].url.params["types"] == "address"

    def test_short_input_skips_upstream(self):
        seen: list[httpx.Request] = []
        assert _call(_json_handler({}, seen=seen), "autocomplete", "16") == []
        assert seen == []

    def test_missing_key_returns_empty(self):
        assert _call(_json_handler({}), "autocomplete", "1600 Amph", api_key="") == []

    def test_upstream_failure_returns_empty(self):
        assert _call(_json_handler({}, status_code=503), "autocomplete", "1600 Amph") == []


class TestNearby:
    def test_parses_places(self):
        seen: list[httpx.Request] = []
        places = _call(_json_handler(NEARBY_OK, seen=seen), "nearby_search", 37.42, -122.08, 1609.0, "park")
        assert [p.name for p in places] == ["Shoreline Park", "Unrated Spot"]
        assert places[0].rating == 4.6
        assert places[1].rating is None
        assert places[1].types == []
        assert seen[0].url.params["location"] == "37.42,-122.08"
        assert seen[0].url.params["type"] == "park"

    def test_malformed_response(self):
        with pytest.raises(UpstreamError):
            _call(_json_handler({"results": [{"name": "no geometry"}]}), "nearby_search", 0.0, 0.0, 100.0, "park")
