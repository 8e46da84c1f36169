"""Shared pytest fixtures for embedded-maps."""

import json
import pytest
from pathlib import Path


BASE_DIR = Path(__file__).parent


@pytest.fixture
def venue_data_path():
    return BASE_DIR / "venue-data" / "venues.json"


@pytest.fixture
def venue_posts(venue_data_path):
    with open(venue_data_path) as f:
        return json.load(f)["posts"]
