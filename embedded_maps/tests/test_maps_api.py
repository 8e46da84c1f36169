"""Tests for the Maps API endpoints.

Uses a minimal FastAPI app with only the maps router and a preloaded
VenueDB patched in place of the on-disk singleton.
"""

from __future__ import annotations

import time
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from embedded_maps.app import create_app
from embedded_maps.routers.maps import router as maps_router


@pytest.fixture
def client(venue_db):
    """Minimal FastAPI TestClient with only the maps router."""
    app = FastAPI(title="Test Maps API")
    app.include_router(maps_router)

    with patch("embedded_maps.routers.maps.get_venue_db", return_value=venue_db), \
            patch("embedded_maps.routers.maps.GEOLOCATION_ENABLED", True):
        with TestClient(app) as c:
            # Clear rate limit buckets between tests
            from embedded_maps.routers.maps import _rate_buckets
            _rate_buckets.clear()
            yield c


# ---------------------------------------------------------------------------
# GET /maps/{post_id}
# ---------------------------------------------------------------------------

class TestMapFragment:
    def test_coordinate_map(self, client):
        resp = client.get("/maps/13?width=300")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert resp.text.startswith('<div class="embedded-osm-map" style="width:300px; height:350px;">')
        assert "bbox=-74.011%2C40.709%2C-74.001%2C40.715" in resp.text

    def test_address_label(self, client):
        resp = client.get("/maps/34?width=50%25&height=200")
        assert resp.status_code == 200
        assert 'style="width:50%; height:200px;' in resp.text
        assert "1 Main St Springfield</div>" in resp.text

    def test_unknown_post_is_empty(self, client):
        resp = client.get("/maps/999")
        assert resp.status_code == 200
        assert resp.text == ""

    def test_empty_address(self, client):
        assert client.get("/maps/14").text == ""

    def test_force(self, client):
        resp = client.get("/maps/17?force=true")
        assert "marker=51.501,-0.142" in resp.text

    def test_non_integer_id(self, client):
        assert client.get("/maps/abc").status_code == 422

    def test_geolocation_disabled(self, client):
        with patch("embedded_maps.routers.maps.GEOLOCATION_ENABLED", False):
            resp = client.get("/maps/13")
        assert 'class="embedded-osm-address"' in resp.text

    def test_rate_limit(self, client):
        with patch("embedded_maps.routers.maps._RATE_LIMIT", 2):
            assert client.get("/maps/12").status_code == 200
            assert client.get("/maps/12").status_code == 200
            assert client.get("/maps/12").status_code == 429

    def test_idle_ip_buckets_dropped(self, client):
        from embedded_maps.routers.maps import _rate_buckets
        _rate_buckets["10.0.0.9"] = [time.monotonic() - 3600]
        _rate_buckets["10.0.0.10"] = []
        assert client.get("/maps/12").status_code == 200
        assert "10.0.0.9" not in _rate_buckets
        assert "10.0.0.10" not in _rate_buckets
        assert len(_rate_buckets) == 1


# ---------------------------------------------------------------------------
# GET /api/v1/maps
# ---------------------------------------------------------------------------

class TestRenderMaps:
    def test_indices_follow_render_order(self, client):
        resp = client.get("/api/v1/maps?ids=12&ids=999&ids=13")
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 3
        assert [r["post_id"] for r in data["results"]] == [12, 999, 13]
        assert data["results"][1]["html"] == ""
        assert [m["title"] for m in data["maps"]] == ["Town Hall", "Pier 17"]
        assert data["maps"][0]["address"] == "1 Main St Springfield "

    def test_each_request_starts_fresh(self, client):
        client.get("/api/v1/maps?ids=12")
        data = client.get("/api/v1/maps?ids=21").json()
        assert len(data["maps"]) == 1
        assert data["maps"][0]["title"] == "Harbour Centre"

    def test_force(self, client):
        data = client.get("/api/v1/maps?ids=14&force=true").json()
        assert data["maps"] == [{"address": "", "title": "Empty Lot"}]

    def test_ids_required(self, client):
        assert client.get("/api/v1/maps").status_code == 422


# ---------------------------------------------------------------------------
# GET /api/v1/maps/{post_id}/data
# ---------------------------------------------------------------------------

class TestMapData:
    def test_data(self, client):
        resp = client.get("/api/v1/maps/35/data")
        assert resp.status_code == 200
        assert resp.json() == {
            "address": "89 South St New York NY 10038 United States ",
            "title": "Pier 17",
        }

    def test_out_of_range(self, client):
        assert client.get("/api/v1/maps/12/data?index=5").json() == {}

    def test_skipped_render_has_no_data(self, client):
        assert client.get("/api/v1/maps/14/data").json() == {}


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

class TestApp:
    def test_health(self):
        with TestClient(create_app()) as c:
            resp = c.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_maps_route_registered(self):
        paths = {route.path for route in create_app().routes}
        assert "/maps/{post_id}" in paths
        assert "/api/v1/maps" in paths
        assert "/api/v1/maps/{post_id}/data" in paths
