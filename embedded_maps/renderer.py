"""Map embed renderer: placeholder HTML for an event's or venue's map.

One renderer belongs to one rendering pass (a page, a request). It resolves
the venue behind a post, forms its address, and returns either an
OpenStreetMap iframe (when coordinates are known) or an address label.
Every embed it produces is recorded in `embedded_maps`, so later code in the
same pass can look a map up again by the index it was given:

    db = get_venue_db()
    renderer = MapEmbedRenderer(db, geo=GeoLocation(db))
    html = renderer.render(34, 300, "", force_load=False)
    renderer.get_map_data(0)  # {"address": "1 Main St Springfield ", "title": "Town Hall"}
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from embedded_maps import hooks as hook_names
from embedded_maps.config import DEFAULT_MAP_HEIGHT, DEFAULT_MAP_WIDTH, DEFAULT_ZOOM_LEVEL
from embedded_maps.hooks import MapHooks
from embedded_maps.markup import (
    build_osm_embed_url,
    esc,
    format_dimension,
    get_address_html,
    get_osm_map_html,
    parse_coordinates,
)
from embedded_maps.services.venue_data import ADDRESS_FIELDS, GeoLocation, VenueDB

logger = logging.getLogger(__name__)

# Client-side script handle; the iframe embed needs no script, page integrations still look it up
MAP_HANDLE = "embedded_osm_map"


def _is_empty(value: str) -> bool:
    """Stored meta counts as unset when blank or "0" (the plugin's empty() check)."""
    return value in ("", "0")


class MapEmbedRenderer:
    """Builds map embeds for one rendering pass and remembers each one by index."""

    def __init__(self, db: VenueDB, geo: Optional[GeoLocation] = None, hooks: Optional[MapHooks] = None) -> None:
        self.db = db
        self.geo = geo
        self.hooks = hooks if hooks is not None else MapHooks()
        self.event_id: Any = 0
        self.venue_id: Any = 0
        self.address = ""
        self.embedded_maps: list[dict] = []

    def render(self, post_id: Any, width: Any = "", height: Any = "", force_load: bool = False) -> str:
        """Return the placeholder HTML for the map of an event or venue.

        force_load adds the map even when no address data can be found.
        Posts that are neither an event nor a venue, and posts without an
        address (unless forced), produce the filtered empty string and are
        not recorded.
        """
        self._resolve_ids(post_id)

        if not self.db.is_venue(self.venue_id) and not self.db.is_event(self.event_id):
            logger.debug("No event or venue for post %r, skipping map", post_id)
            return self.hooks.apply_filters(hook_names.EMBEDDED_MAP_HTML, "")

        self.form_address()

        if not self.address and not force_load:
            logger.debug("No address for venue %r, skipping map", self.venue_id)
            return self.hooks.apply_filters(hook_names.EMBEDDED_MAP_HTML, "")

        self.embedded_maps.append({
            "address": self.address,
            "title": esc(self.db.title(self.venue_id)),
        })
        index = len(self.embedded_maps) - 1

        width = format_dimension(width)
        height = format_dimension(height)
        width = width or self.hooks.apply_filters(hook_names.MAP_DEFAULT_WIDTH, DEFAULT_MAP_WIDTH)
        height = height or self.hooks.apply_filters(hook_names.MAP_DEFAULT_HEIGHT, DEFAULT_MAP_HEIGHT)

        # Stored coordinates win over the textual address, for the map only
        address = self.address.strip()
        if self.geo is not None:
            lat, lng = self.geo.latitude(self.venue_id), self.geo.longitude(self.venue_id)
            if not _is_empty(lat) and not _is_empty(lng):
                address = f"{lat},{lng}"

        lat, lng = parse_coordinates(address)

        if lat and lng:
            # The bounding box sets the zoom; the filter still runs for integrations listening on it
            self.hooks.apply_filters(hook_names.MAP_ZOOM_LEVEL, DEFAULT_ZOOM_LEVEL)
            output = get_osm_map_html(build_osm_embed_url(lat, lng), width, height)
        elif address:
            output = get_address_html(address, width, height)
        else:
            output = ""

        self.hooks.do_action(hook_names.MAP_EMBEDDED, index, self.venue_id)
        return self.hooks.apply_filters(hook_names.EMBEDDED_MAP_HTML, output)

    def _resolve_ids(self, post_id: Any) -> None:
        post_id = self.db.resolve_canonical_id(post_id)
        self.event_id = post_id if self.db.is_event(post_id) else 0
        self.venue_id = post_id if self.db.is_venue(post_id) else self.db.venue_id_for_event(post_id)

    def form_address(self) -> str:
        """Join the venue's address fields into the map address.

        Fields are space-joined in fixed order, each followed by a space.
        A venue with no address fields that is set to overwrite its
        coordinates gets "lat,lng" instead.
        """
        self.address = ""

        for field in ADDRESS_FIELDS:
            part = self.db.field_value(self.venue_id, field)
            if part:
                self.address += part + " "

        if self.geo is not None and not self.address.strip() and self.geo.overwrite(self.venue_id):
            lat = self.geo.latitude(self.venue_id)
            lng = self.geo.longitude(self.venue_id)
            self.address = f"{lat},{lng}"

        return self.address

    def get_map_data(self, map_index: int) -> dict:
        """Stored {"address", "title"} for a map, or {} if there is none."""
        if isinstance(map_index, int) and 0 <= map_index < len(self.embedded_maps):
            return self.embedded_maps[map_index]
        return {}

    def update_map_data(self, map_index: int, data: dict) -> None:
        """Replace the stored data for a map. Indices past the end are created."""
        if not isinstance(map_index, int) or map_index < 0:
            logger.warning("Ignoring map data update for invalid index %r", map_index)
            return
        while len(self.embedded_maps) <= map_index:
            self.embedded_maps.append({})
        self.embedded_maps[map_index] = data
