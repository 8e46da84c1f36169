"""Venue database service: content store for events, venues and venue meta.

Loads posts from a static JSON file once (lazily) and answers the lookups the
map renderer needs: event/venue classification, event → venue association,
venue titles and address fields. The optional geolocation add-on reads the
stored coordinates from the same meta.

File format: either a list of posts or {"posts": [...]}, where a post is

    {"id": 12, "type": "venue", "title": "Town Hall",
     "meta": {"address": "1 Main St", "city": "Springfield",
              "lat": "40.712", "lng": "-74.006", "overwrite_coords": "0"}}
    {"id": 34, "type": "event", "title": "Spring Fair", "venue_id": 12}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from embedded_maps.config import CURRENT_POST_ID, VENUE_DATA_PATH

logger = logging.getLogger(__name__)

EVENT_TYPE = "event"
VENUE_TYPE = "venue"

# Address fields, in the order they are joined into a map address
ADDRESS_FIELDS = ("address", "city", "state", "province", "zip", "country")

# Geolocation add-on meta keys
LAT_KEY = "lat"
LNG_KEY = "lng"
OVERWRITE_KEY = "overwrite_coords"


def _as_post_id(value: Any) -> Optional[int]:
    """Coerce an id (int or numeric string) to int. None if not an id."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


class VenueDB:
    """Events and venues loaded from a static JSON file."""

    def __init__(self, data_path: Path | None = None, current_post_id: int = CURRENT_POST_ID) -> None:
        self._data_path = data_path
        self._posts: dict[int, dict] = {}  # id → post
        self.current_post_id = current_post_id
        self._loaded = False

    def load(self, data_path: Path | None = None) -> None:
        """Load posts from disk. Safe to call multiple times (no-ops after first)."""
        if self._loaded:
            return

        path = data_path or self._data_path or VENUE_DATA_PATH

        if path.exists():
            try:
                data = json.loads(path.read_text())
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.warning("Venue data at %s is not valid JSON: %s", path, e)
                data = []
            posts = data.get("posts", []) if isinstance(data, dict) else data
            for post in posts if isinstance(posts, list) else []:
                self.add_post(post)
            logger.info("Loaded %d posts from %s", len(self._posts), path)
        else:
            logger.warning("Venue data not found at %s", path)

        self._loaded = True

    def add_post(self, post: Any) -> bool:
        """Register a single post. Returns False (and skips it) when malformed."""
        if not isinstance(post, dict):
            return False
        post_id = _as_post_id(post.get("id"))
        if not post_id or post.get("type") not in (EVENT_TYPE, VENUE_TYPE):
            logger.debug("Skipping malformed post: %r", post)
            return False
        meta = post.get("meta") if isinstance(post.get("meta"), dict) else {}
        self._posts[post_id] = {**post, "id": post_id, "meta": meta}
        return True

    @property
    def posts(self) -> dict[int, dict]:
        self.load()
        return self._posts

    def get_post(self, post_id: Any) -> Optional[dict]:
        pid = _as_post_id(post_id)
        if pid is None:
            return None
        return self.posts.get(pid)

    def set_current_post(self, post_id: int) -> None:
        """Set the post that id 0 / None resolves to."""
        self.current_post_id = post_id

    # ── Lookups used by the renderer ─────────────────────────

    def resolve_canonical_id(self, post_id: Any) -> Any:
        """Normalize an id: empty/0 means the current post, numeric strings become ints."""
        pid = _as_post_id(post_id)
        if post_id is None or post_id == "" or pid == 0:
            return self.current_post_id
        return post_id if pid is None else pid

    def is_event(self, post_id: Any) -> bool:
        post = self.get_post(post_id)
        return bool(post) and post["type"] == EVENT_TYPE

    def is_venue(self, post_id: Any) -> bool:
        post = self.get_post(post_id)
        return bool(post) and post["type"] == VENUE_TYPE

    def venue_id_for_event(self, post_id: Any) -> int:
        """Venue linked to an event, or 0."""
        if not self.is_event(post_id):
            return 0
        return _as_post_id(self.get_post(post_id).get("venue_id")) or 0

    def title(self, post_id: Any) -> str:
        post = self.get_post(post_id)
        return str(post.get("title") or "") if post else ""

    def meta(self, post_id: Any, key: str) -> Any:
        """Raw meta value, or None."""
        post = self.get_post(post_id)
        return post["meta"].get(key) if post else None

    def field_value(self, post_id: Any, field: str) -> str:
        """One of the ADDRESS_FIELDS as a string ("" when missing)."""
        value = self.meta(post_id, field)
        return "" if value is None else str(value)


class GeoLocation:
    """Geolocation add-on: stored coordinates for venues."""

    def __init__(self, db: VenueDB) -> None:
        self.db = db

    def latitude(self, venue_id: Any) -> str:
        value = self.db.meta(venue_id, LAT_KEY)
        return "" if value is None else str(value)

    def longitude(self, venue_id: Any) -> str:
        value = self.db.meta(venue_id, LNG_KEY)
        return "" if value is None else str(value)

    def overwrite(self, venue_id: Any) -> bool:
        """Whether the venue is set to use its stored coordinates over its address."""
        value = self.db.meta(venue_id, OVERWRITE_KEY)
        if isinstance(value, bool):
            return value
        try:
            return int(float(value)) != 0
        except (TypeError, ValueError, OverflowError):
            return False


# Module-level singleton
_db: VenueDB | None = None


def get_venue_db() -> VenueDB:
    """FastAPI dependency: returns the singleton VenueDB instance."""
    global _db
    if _db is None:
        _db = VenueDB()
        _db.load()
    return _db
