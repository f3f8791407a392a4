"""
Tests for the WebSocket surface and the per-connection UpdateTicker.

Tests cover:
- Ticker timing: nothing is pushed until the interval has elapsed
- Ticker lifecycle: cancelled on exit, stops when sends fail
- End to end: initial message on connect, updates afterwards
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from airq.config import Settings
from airq.deps import app_settings, get_resolver
from airq.main import create_stream_app
from airq.stream import UpdateTicker, stream_message

YIELDS = 10


async def spin():
    # Give the ticker task a few turns of the event loop
    for _ in range(YIELDS):
        await asyncio.sleep(0)


class GatedSleep:
    """Sleep replacement that only returns when the test opens the gate."""

    def __init__(self):
        self.calls = []
        self.gate = asyncio.Event()

    async def __call__(self, seconds):
        self.calls.append(seconds)
        await self.gate.wait()
        self.gate.clear()


class TestUpdateTicker:
    """Test suite for UpdateTicker."""

    def test_no_update_before_interval(self, sample_reading):
        async def scenario():
            sent = []
            sleep = GatedSleep()

            async def send(message):
                sent.append(message)

            async def resolve():
                return sample_reading

            async with UpdateTicker(send, resolve, interval=30, sleep=sleep) as ticker:
                await spin()
                assert sent == []
                assert sleep.calls == [30]

                sleep.gate.set()
                await spin()
                assert [m["type"] for m in sent] == ["update"]
                assert sleep.calls == [30, 30]

                sleep.gate.set()
                await spin()
                assert len(sent) == 2
                task = ticker._task

            assert task.cancelled()
            assert not ticker.running
            assert ticker.sent == 2

        asyncio.run(scenario())

    def test_update_payload(self, sample_reading):
        async def scenario():
            sent = []

            async def send(message):
                sent.append(message)

            async def resolve():
                return sample_reading

            async with UpdateTicker(send, resolve, interval=0):
                while not sent:
                    await asyncio.sleep(0)
            return sent[0]

        message = asyncio.run(scenario())
        assert message["type"] == "update"
        assert message["data"]["location"] == "New York, NY"
        assert "healthRecommendations" in message["data"]
        assert "lastUpdated" in message["data"]

    def test_send_failure_ends_ticker(self, sample_reading):
        async def scenario():
            async def send(message):
                raise RuntimeError("socket closed")

            async def resolve():
                return sample_reading

            ticker = UpdateTicker(send, resolve, interval=0)
            ticker.start()
            await spin()
            assert not ticker.running
            assert ticker.sent == 0
            await ticker.stop()

        asyncio.run(scenario())

    def test_stop_without_start(self, sample_reading):
        async def scenario():
            async def send(message):
                pass

            async def resolve():
                return sample_reading

            ticker = UpdateTicker(send, resolve)
            await ticker.stop()
            assert not ticker.running

        asyncio.run(scenario())

    def test_start_is_idempotent(self, sample_reading):
        async def scenario():
            async def send(message):
                pass

            async def resolve():
                return sample_reading

            sleep = GatedSleep()
            async with UpdateTicker(send, resolve, interval=30, sleep=sleep) as ticker:
                first = ticker._task
                ticker.start()
                assert ticker._task is first
                await spin()
                assert sleep.calls == [30]

        asyncio.run(scenario())


class TestStreamMessage:
    """Test suite for the wire envelope."""

    def test_envelope_uses_camel_case(self, sample_reading):
        message = stream_message("initial", sample_reading)
        assert message["type"] == "initial"
        assert set(message["data"]) >= {"aqi", "category", "location", "pollutants", "forecast",
                                        "healthRecommendations", "lastUpdated"}
        assert message["data"]["forecast"][0]["day"] == "Today"


class TestStreamEndpoint:
    """Test suite for the WebSocket route."""

    def client_for(self, resolver, interval):
        app = create_stream_app(Settings(stream_interval_seconds=interval))
        app.dependency_overrides[get_resolver] = lambda: resolver
        return TestClient(app)

    def test_initial_message_on_connect(self, offline_resolver):
        client = self.client_for(offline_resolver, interval=30)
        with client.websocket_connect("/") as ws:
            message = ws.receive_json()

        assert message["type"] == "initial"
        assert message["data"]["location"] == "New York, NY"
        assert message["data"]["aqi"] == 78
        assert len(message["data"]["forecast"]) == 6

    def test_overridden_settings_pick_stream_location(self, offline_resolver):
        client = self.client_for(offline_resolver, interval=30)
        client.app.dependency_overrides[app_settings] = lambda: Settings(default_location="London, UK", stream_interval_seconds=30)
        with client.websocket_connect("/") as ws:
            message = ws.receive_json()

        assert message["data"]["location"] == "London, UK"
        assert message["data"]["aqi"] == 55

    @pytest.mark.slow
    def test_updates_follow_initial(self, offline_resolver):
        client = self.client_for(offline_resolver, interval=0.05)
        with client.websocket_connect("/") as ws:
            types = [ws.receive_json()["type"] for _ in range(3)]

        assert types == ["initial", "update", "update"]

    def test_client_messages_are_ignored(self, offline_resolver):
        client = self.client_for(offline_resolver, interval=30)
        with client.websocket_connect("/") as ws:
            assert ws.receive_json()["type"] == "initial"
            ws.send_text("Delhi, India")
            ws.send_text("ping")
