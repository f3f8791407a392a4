"""
Process entry point: serve the HTTP API and the WebSocket stream side by side.

    python -m airq.server
"""
import asyncio
import logging

import uvicorn

from .config import get_settings
from .logging_config import configure_logging
from .main import create_app, create_stream_app

logger = logging.getLogger(__name__)


async def serve() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    http_server = uvicorn.Server(uvicorn.Config(
        create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower(),
    ))
    ws_server = uvicorn.Server(uvicorn.Config(
        create_stream_app(settings), host=settings.host, port=settings.ws_port, log_level=settings.log_level.lower(),
    ))

    logger.info(f"Air quality API: http://localhost:{settings.port}/api/air-quality")
    logger.info(f"Locations API: http://localhost:{settings.port}/api/locations")
    logger.info(f"WebSocket stream: ws://localhost:{settings.ws_port}")
    logger.info(f"Dashboard: http://localhost:{settings.port}")

    await asyncio.gather(http_server.serve(), ws_server.serve())


def main() -> None:
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
