"""FastAPI application factory."""

import logging

from fastapi import FastAPI

from embedded_maps.routers import maps

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Embedded Maps",
        description=(
            "Map embed previews for events and venues. "
            "Render OpenStreetMap placeholders at /maps/{post_id}."
        ),
        version="1.0.0",
        docs_url="/api/v1/docs",
        redoc_url="/api/v1/redoc",
        openapi_url="/api/v1/openapi.json",
    )

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    app.include_router(maps.router)
    logger.debug("Maps router registered")

    return app
