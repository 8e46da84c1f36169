"""Shared fixtures for embedded maps tests.

Provides:
- venue_db: VenueDB preloaded with sample posts (no disk I/O)
- geo: GeoLocation add-on over venue_db
- hooks: empty MapHooks registry
- renderer / geo_renderer: MapEmbedRenderer without / with the add-on
"""

import copy

import pytest

from embedded_maps.hooks import MapHooks
from embedded_maps.renderer import MapEmbedRenderer
from embedded_maps.services.venue_data import GeoLocation, VenueDB

# ---------------------------------------------------------------------------
# Sample posts
# ---------------------------------------------------------------------------

SAMPLE_POSTS = [
    # Plain street address
    {
        "id": 12,
        "type": "venue",
        "title": "Town Hall",
        "meta": {"address": "1 Main St", "city": "Springfield"},
    },
    # Address plus stored coordinates
    {
        "id": 13,
        "type": "venue",
        "title": "Pier 17",
        "meta": {
            "address": "89 South St",
            "city": "New York",
            "state": "NY",
            "zip": "10038",
            "country": "United States",
            "lat": "40.712",
            "lng": "-74.006",
        },
    },
    # No address at all
    {"id": 14, "type": "venue", "title": "Empty Lot", "meta": {}},
    # Coordinates only, set to overwrite
    {
        "id": 15,
        "type": "venue",
        "title": "Trailhead Camp",
        "meta": {"lat": "39.243", "lng": "-106.293", "overwrite_coords": "1"},
    },
    # Overwrite flag without coordinates
    {"id": 16, "type": "venue", "title": "Mystery Spot", "meta": {"overwrite_coords": 1}},
    # Coordinates stored but not set to overwrite
    {
        "id": 17,
        "type": "venue",
        "title": "Quiet Field",
        "meta": {"lat": "51.501", "lng": "-0.142", "overwrite_coords": "0"},
    },
    # Markup in title and address
    {
        "id": 20,
        "type": "venue",
        "title": "Bob's <Bar> & Grill",
        "meta": {"address": "<b>5 High St</b>", "city": "Leeds & Bradford"},
    },
    # Province/zip/country ordering
    {
        "id": 21,
        "type": "venue",
        "title": "Harbour Centre",
        "meta": {
            "country": "Canada",
            "zip": "V6B 4N6",
            "province": "BC",
            "city": "Vancouver",
            "address": "555 W Hastings St",
        },
    },
    {"id": 34, "type": "event", "title": "Spring Fair", "venue_id": 12},
    {"id": 35, "type": "event", "title": "Harbor Lights", "venue_id": 13},
    {"id": 36, "type": "event", "title": "Online Meetup"},
    {"id": 37, "type": "event", "title": "Lost Event", "venue_id": 99},
    {"id": 38, "type": "event", "title": "Campfire", "venue_id": "15"},
]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def venue_db():
    """Create a VenueDB preloaded with sample posts (no disk I/O)."""
    db = VenueDB()
    for post in copy.deepcopy(SAMPLE_POSTS):
        db.add_post(post)
    db._loaded = True
    return db


@pytest.fixture
def geo(venue_db):
    return GeoLocation(venue_db)


@pytest.fixture
def hooks():
    return MapHooks()


@pytest.fixture
def renderer(venue_db, hooks):
    """Renderer without the geolocation add-on."""
    return MapEmbedRenderer(venue_db, hooks=hooks)


@pytest.fixture
def geo_renderer(venue_db, geo, hooks):
    """Renderer with the geolocation add-on."""
    return MapEmbedRenderer(venue_db, geo=geo, hooks=hooks)
