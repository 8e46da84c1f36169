"""HTML builders for map embeds.

Provides the two fragments a map placeholder can turn into: an OpenStreetMap
iframe centred on a marker, or a sized box showing the venue address when no
coordinates are known. Plus the small helpers both need (escaping,
dimension normalization, coordinate parsing and the embed URL).
"""
from __future__ import annotations

import html as html_mod
import math
import re

from embedded_maps.config import OSM_EMBED_URL, OSM_LAYER

# "lat,lng" with a decimal point in both numbers, e.g. "40.712, -74.006"
COORDINATES_RE = re.compile(r"^(-?\d+\.\d+),\s*(-?\d+\.\d+)$")

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")

# Half-size of the bounding box around the marker, in degrees
BBOX_LNG_PAD = 0.005
BBOX_LAT_PAD = 0.003


def esc(text) -> str:
    return html_mod.escape(str(text)) if text else ""


def is_numeric(value) -> bool:
    """True for ints, floats and numeric strings ("300", "1.5", " 42 ")."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    return isinstance(value, str) and bool(_NUMERIC_RE.match(value))


def format_dimension(value):
    """Append "px" to a bare number; anything else ("100%", "20em", "") is returned as is."""
    if not is_numeric(value):
        return value
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{str(value).strip()}px"


def parse_coordinates(text: str) -> tuple[str | None, str | None]:
    """Split "lat,lng" into its two numeric strings, or (None, None)."""
    m = COORDINATES_RE.match(text or "")
    if not m:
        return None, None
    return m.group(1), m.group(2)


def bounding_box(lat, lng) -> tuple[float, float, float, float]:
    """(min_lng, min_lat, max_lng, max_lat) around a marker."""
    lat, lng = float(lat), float(lng)
    return (lng - BBOX_LNG_PAD, lat - BBOX_LAT_PAD, lng + BBOX_LNG_PAD, lat + BBOX_LAT_PAD)


def format_coordinate(value: float) -> str:
    """14 significant digits, no trailing zeros: -74.006 - 0.005 → "-74.011"."""
    return f"{value:.14g}"


def build_osm_embed_url(lat: str, lng: str, base_url: str = OSM_EMBED_URL, layer: str = OSM_LAYER) -> str:
    """OpenStreetMap embed URL framing the marker at (lat, lng)."""
    bbox = "%2C".join(format_coordinate(v) for v in bounding_box(lat, lng))
    return f"{base_url}?bbox={bbox}&layer={layer}&marker={lat},{lng}"


def get_osm_map_html(url: str, width: str, height: str) -> str:
    """Return the fixed-size container wrapping the map iframe."""
    return (
        f'<div class="embedded-osm-map" style="width:{esc(width)}; height:{esc(height)};">'
        f'<iframe width="100%" height="100%" frameborder="0" scrolling="no" marginheight="0" marginwidth="0" '
        f'src="{esc(url)}" style="border:1px solid #ccc"></iframe>'
        f'</div>'
    )


def get_address_html(address: str, width: str, height: str) -> str:
    """Return the address label shown when there are no coordinates."""
    return (
        f'<div class="embedded-osm-address" style="width:{esc(width)}; height:{esc(height)}; '
        f'display:flex; align-items:center; justify-content:center; border:1px solid #ccc;">'
        f'{esc(address)}'
        f'</div>'
    )
