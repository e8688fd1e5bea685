"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mapcomposer import __version__
from mapcomposer.config import Settings

load_dotenv()


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.mapcomposer_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    _configure_logging(settings)

    app = FastAPI(
        title="mapcomposer",
        description="Geospatial API proxy and annotated static map compositor",
        version=__version__,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    from mapcomposer.api.router import api_router

    app.include_router(api_router)

    logger = logging.getLogger(__name__)
    logger.info(
        "mapcomposer ready (env=%s, google_places=%s, mapbox=%s)",
        settings.mapcomposer_env,
        settings.google_places_configured,
        settings.mapbox_configured,
    )
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
