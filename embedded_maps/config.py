"""Embedded maps configuration: loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# Root of the repo
REPO_ROOT = Path(__file__).resolve().parent.parent

# Content store (posts + venue meta)
VENUE_DATA_PATH = Path(os.environ.get("VENUE_DATA_PATH", str(REPO_ROOT / "venue-data" / "venues.json")))

# Post shown when a render asks for the "current post" (id 0 / None)
CURRENT_POST_ID = int(os.environ.get("CURRENT_POST_ID", "0") or 0)

# OpenStreetMap embed endpoint
OSM_EMBED_URL = os.environ.get("OSM_EMBED_URL", "https://www.openstreetmap.org/export/embed.html")
OSM_LAYER = os.environ.get("OSM_LAYER", "mapnik")

# Map defaults (all overridable through hooks at render time)
DEFAULT_MAP_WIDTH = os.environ.get("DEFAULT_MAP_WIDTH", "100%")
DEFAULT_MAP_HEIGHT = os.environ.get("DEFAULT_MAP_HEIGHT", "350px")
DEFAULT_ZOOM_LEVEL = int(os.environ.get("DEFAULT_ZOOM_LEVEL", "15"))

# Geolocation add-on (stored lat/lng per venue)
GEOLOCATION_ENABLED = os.environ.get("GEOLOCATION_ENABLED", "1").lower() in ("1", "true", "yes", "on")

# Server
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8000"))
