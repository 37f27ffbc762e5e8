from __future__ import annotations

import asyncio
from datetime import datetime
from typing import List, Optional

import pytest

from chat_relay.hub import ConnectionHub
from chat_relay.relay import ChatRelay

FIXED_NOW = datetime(2024, 3, 9, 21, 5, 7)


def drain(outbox: asyncio.Queue) -> List[dict]:
    """Pop every queued frame without waiting."""
    frames = []
    while True:
        try:
            frames.append(outbox.get_nowait())
        except asyncio.QueueEmpty:
            return frames


class Client:
    """A registered connection plus the frames queued for it."""

    def __init__(self, hub: ConnectionHub):
        self.sid, self.outbox = hub.register()

    def frames(self, event: Optional[str] = None) -> List[dict]:
        frames = drain(self.outbox)
        if event is None:
            return frames
        return [f["data"] for f in frames if f["type"] == event]


@pytest.fixture
def hub() -> ConnectionHub:
    return ConnectionHub()


@pytest.fixture
def relay(hub) -> ChatRelay:
    return ChatRelay(hub, clock=lambda: FIXED_NOW)


@pytest.fixture
def connect(hub, relay):
    def _connect() -> Client:
        client = Client(hub)
        relay.handle_connect(client.sid)
        return client

    return _connect
