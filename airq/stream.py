"""
Per-connection push loop for the WebSocket surface.

Each connection gets one UpdateTicker: a background task that sleeps for the
interval, resolves a fresh Reading and pushes it. The ticker is an async
context manager so the task is cancelled however the connection ends.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import WebSocket

from .resolver import AirQualityResolver
from .schemas import Reading, StreamMessage

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30.0

Send = Callable[[Dict[str, Any]], Awaitable[None]]
Resolve = Callable[[], Awaitable[Reading]]
Sleep = Callable[[float], Awaitable[Any]]


def stream_message(kind: str, reading: Reading) -> Dict[str, Any]:
    return StreamMessage(type=kind, data=reading).model_dump(mode="json", by_alias=True)


class UpdateTicker:
    def __init__(
        self,
        send: Send,
        resolve: Resolve,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        sleep: Sleep = asyncio.sleep,
    ):
        self._send = send
        self._resolve = resolve
        self.interval = interval
        self._sleep = sleep
        self._task: Optional[asyncio.Task] = None
        self.sent = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def __aenter__(self) -> "UpdateTicker":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def _run(self) -> None:
        while True:
            await self._sleep(self.interval)
            reading = await self._resolve()
            try:
                await self._send(stream_message("update", reading))
            except Exception as e:
                # Socket went away between ticks; the receive loop will notice the close
                logger.info(f"Stopping updates, send failed: {e!r}")
                return
            self.sent += 1


async def serve_stream(
    websocket: WebSocket,
    resolver: AirQualityResolver,
    location: str,
    interval: float = DEFAULT_INTERVAL_SECONDS,
) -> None:
    """Send the initial Reading, then push updates until the client disconnects."""
    await websocket.accept()
    client = websocket.client
    logger.info(f"WebSocket client connected: {client}")

    reading = await resolver.resolve(location)
    await websocket.send_json(stream_message("initial", reading))

    ticker = UpdateTicker(
        send=websocket.send_json,
        resolve=lambda: resolver.resolve(location),
        interval=interval,
    )
    async with ticker:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

    logger.info(f"WebSocket client disconnected: {client} ({ticker.sent} update(s) sent)")
