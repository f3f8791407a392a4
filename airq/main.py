import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .config import Settings, get_settings
from .fallback import FallbackStore
from .providers.openaq import OpenAQProvider
from .resolver import AirQualityResolver
from .routers import air_quality, stream

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).parent / "public"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pooled client per app; closed on shutdown
    settings: Settings = app.state.settings
    async with httpx.AsyncClient() as client:
        provider = OpenAQProvider(client, base_url=settings.openaq_base_url, api_key=settings.openaq_api_key)
        app.state.resolver = AirQualityResolver(
            provider,
            fallback=FallbackStore(default_location=settings.default_location),
        )
        logger.info(f"Resolver ready (provider {settings.openaq_base_url})")
        yield


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """HTTP surface: JSON API under /api plus the static dashboard at /."""
    settings = settings or get_settings()
    app = FastAPI(title="airq", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    app.include_router(air_quality.router)
    # Mounted last so /api and /healthz win over static files
    app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")
    return app


def create_stream_app(settings: Optional[Settings] = None) -> FastAPI:
    """WebSocket surface, served on its own port."""
    settings = settings or get_settings()
    app = FastAPI(title="airq stream", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(stream.router)
    return app


app = create_app()
stream_app = create_stream_app()
