#!/usr/bin/env python3
"""
Render map embeds for events/venues from the command line.

All ids are rendered in one pass, so map indices follow argument order.

Usage:
    python scripts/render_map.py 34                      # Map for post 34
    python scripts/render_map.py 34 12 --width 300       # Two maps, 300px wide
    python scripts/render_map.py 12 --force              # Even without an address
    python scripts/render_map.py 12 --no-geo             # Ignore stored coordinates
    python scripts/render_map.py 34 12 --json            # HTML + map data as JSON
    python scripts/render_map.py 34 --data venues.json   # Alternate content store
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from embedded_maps.config import GEOLOCATION_ENABLED, VENUE_DATA_PATH
from embedded_maps.renderer import MapEmbedRenderer
from embedded_maps.services.venue_data import GeoLocation, VenueDB


def render_posts(db: VenueDB, post_ids: list, width="", height="", force=False, geo=True):
    """Render each post in one renderer. Returns (results, embedded_maps)."""
    renderer = MapEmbedRenderer(db, geo=GeoLocation(db) if geo else None)
    results = [
        {"post_id": post_id, "html": renderer.render(post_id, width, height, force)}
        for post_id in post_ids
    ]
    return results, renderer.embedded_maps


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render map embeds for events and venues")
    parser.add_argument("post_ids", nargs="+", help="Event or venue post ids")
    parser.add_argument("--data", type=Path, default=VENUE_DATA_PATH, help="Posts JSON file")
    parser.add_argument("--width", default="", help="CSS width (bare numbers are pixels)")
    parser.add_argument("--height", default="", help="CSS height (bare numbers are pixels)")
    parser.add_argument("--force", action="store_true", help="Render even when a venue has no address")
    parser.add_argument("--no-geo", action="store_true", help="Ignore stored venue coordinates")
    parser.add_argument("--json", action="store_true", help="Print HTML and map data as JSON")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.data.exists():
        try:
            json.loads(args.data.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            print(f"ERROR: {args.data} is not valid JSON: {e}", file=sys.stderr)
            return 1

    db = VenueDB(args.data)
    db.load()

    use_geo = GEOLOCATION_ENABLED and not args.no_geo
    results, maps = render_posts(db, args.post_ids, args.width, args.height, args.force, use_geo)

    if args.json:
        print(json.dumps({"results": results, "maps": maps}, indent=2))
    else:
        for r in results:
            print(r["html"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
