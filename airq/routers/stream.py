# airq/routers/stream.py
from fastapi import APIRouter, Depends, WebSocket

from ..config import Settings
from ..deps import app_settings, get_resolver
from ..resolver import AirQualityResolver
from ..stream import serve_stream

router = APIRouter(tags=["stream"])


@router.websocket("/")
async def air_quality_stream(
    websocket: WebSocket,
    resolver: AirQualityResolver = Depends(get_resolver),
    settings: Settings = Depends(app_settings),
):
    # Always the default location; the client has no way to pick one
    await serve_stream(
        websocket,
        resolver,
        location=settings.default_location,
        interval=settings.stream_interval_seconds,
    )
