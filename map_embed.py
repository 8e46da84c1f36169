#!/usr/bin/env python3
"""Embedded Maps: map embed preview server.

Launch: python3 map_embed.py
Serves at http://0.0.0.0:8000 (or PORT env var)
"""

import logging

import uvicorn

from embedded_maps.config import GEOLOCATION_ENABLED, HOST, PORT, VENUE_DATA_PATH


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("  Embedded Maps")
    print("=" * 60)

    if not VENUE_DATA_PATH.exists():
        print(f"\n  WARNING: venue data not found at {VENUE_DATA_PATH}")
        print("    Set VENUE_DATA_PATH to a posts JSON file.")
        print("  Continuing anyway, every map will render empty...\n")

    print(f"  Venue data: {VENUE_DATA_PATH}")
    print(f"  Geolocation: {'on' if GEOLOCATION_ENABLED else 'off'}")

    url = f"http://{HOST}:{PORT}"
    print(f"\n  Maps: {url}/maps/<post_id>")
    print(f"  API docs: {url}/api/v1/docs")
    print("  Press Ctrl+C to stop\n")

    from embedded_maps.app import create_app
    app = create_app()
    uvicorn.run(app, host=HOST, port=PORT, log_level="info")


if __name__ == "__main__":
    main()
