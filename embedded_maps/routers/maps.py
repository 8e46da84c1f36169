"""Maps API: preview the map embed HTML for events and venues.

Each request gets its own MapEmbedRenderer, so the embedded map list a
response reports only ever holds the maps rendered for that request.
"""

from __future__ import annotations

import time

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from embedded_maps.config import GEOLOCATION_ENABLED
from embedded_maps.renderer import MapEmbedRenderer
from embedded_maps.services.venue_data import GeoLocation, VenueDB, get_venue_db

router = APIRouter()

# ---------------------------------------------------------------------------
# Rate limiting (sliding window per IP)
# ---------------------------------------------------------------------------

_rate_buckets: dict[str, list[float]] = {}
_RATE_LIMIT = 120  # renders per window
_RATE_WINDOW = 60  # seconds


def _check_rate_limit(request: Request) -> None:
    """Raise 429 if IP exceeds rate limit."""
    ip = request.client.host if request.client else "unknown"
    now = time.monotonic()
    cutoff = now - _RATE_WINDOW
    # IPs with nothing inside the window hold no bucket
    for stale in [k for k, times in _rate_buckets.items() if not times or times[-1] <= cutoff]:
        del _rate_buckets[stale]
    bucket = [t for t in _rate_buckets.get(ip, ()) if t > cutoff]
    if len(bucket) >= _RATE_LIMIT:
        _rate_buckets[ip] = bucket
        raise HTTPException(status_code=429, detail="Rate limit exceeded")
    bucket.append(now)
    _rate_buckets[ip] = bucket


def build_renderer(db: VenueDB) -> MapEmbedRenderer:
    """New renderer for one request, with the geolocation add-on when enabled."""
    geo = GeoLocation(db) if GEOLOCATION_ENABLED else None
    return MapEmbedRenderer(db, geo=geo)


# ---------------------------------------------------------------------------
# GET /maps/{post_id}: HTML fragment
# ---------------------------------------------------------------------------

@router.get("/maps/{post_id}", response_class=HTMLResponse)
async def map_fragment(
    request: Request,
    post_id: int,
    width: str = Query("", description="CSS width; bare numbers are pixels"),
    height: str = Query("", description="CSS height; bare numbers are pixels"),
    force: bool = Query(False, description="Render even when the venue has no address"),
):
    _check_rate_limit(request)
    renderer = build_renderer(get_venue_db())
    return HTMLResponse(renderer.render(post_id, width, height, force))


# ---------------------------------------------------------------------------
# GET /api/v1/maps: render several posts in one pass
# ---------------------------------------------------------------------------

@router.get(
    "/api/v1/maps",
    summary="Render map embeds",
    description=(
        "Renders the map embed for each post id, in order, within one "
        "rendering pass. Returns the HTML per post and the embedded map list "
        "(address and title per map, indexed in render order)."
    ),
    tags=["Maps"],
)
async def render_maps(
    request: Request,
    ids: list[int] = Query(..., description="Event or venue post ids, repeatable"),
    width: str = Query("", description="CSS width; bare numbers are pixels"),
    height: str = Query("", description="CSS height; bare numbers are pixels"),
    force: bool = Query(False, description="Render even when a venue has no address"),
):
    _check_rate_limit(request)
    renderer = build_renderer(get_venue_db())
    results = [
        {"post_id": post_id, "html": renderer.render(post_id, width, height, force)}
        for post_id in ids
    ]
    return {
        "count": len(results),
        "results": results,
        "maps": renderer.embedded_maps,
    }


# ---------------------------------------------------------------------------
# GET /api/v1/maps/{post_id}/data: stored map data
# ---------------------------------------------------------------------------

@router.get(
    "/api/v1/maps/{post_id}/data",
    summary="Get embedded map data",
    description=(
        "Renders the post's map and returns the data stored for the map at "
        "`index` (an empty object when there is no such map)."
    ),
    tags=["Maps"],
)
async def map_data(
    request: Request,
    post_id: int,
    index: int = Query(0, description="Map index within the rendering pass"),
    force: bool = Query(False, description="Render even when the venue has no address"),
):
    _check_rate_limit(request)
    renderer = build_renderer(get_venue_db())
    renderer.render(post_id, "", "", force)
    return renderer.get_map_data(index)
