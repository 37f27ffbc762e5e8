from __future__ import annotations

import asyncio
import contextlib
import logging

from fastapi import APIRouter, WebSocket

from ..hub import ConnectionHub
from ..relay import ChatRelay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["ws"])


async def _pump_outbox(ws: WebSocket, hub: ConnectionHub, sid: str, outbox: asyncio.Queue) -> None:
    """Forward queued frames to the socket until it goes away."""
    try:
        while True:
            frame = await outbox.get()
            await ws.send_json(frame)
    except Exception as e:
        # Client disconnected unexpectedly; stop queueing for it. The receive
        # loop still runs the relay's disconnect handling.
        logger.warning("Send to %s failed: %s", sid, e)
        hub.unregister(sid)


async def _stop_sender(sender: asyncio.Task) -> None:
    sender.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sender


@router.websocket("/ws")
async def chat_ws_endpoint(ws: WebSocket):
    relay: ChatRelay = ws.app.state.relay
    await ws.accept()

    sid, outbox = relay.hub.register()
    sender = asyncio.create_task(_pump_outbox(ws, relay.hub, sid, outbox))
    logger.info("User %s connected", sid)
    relay.handle_connect(sid)

    try:
        while True:
            message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                logger.warning("Ignoring binary frame from %s", sid)
                continue
            relay.dispatch(sid, raw)
    finally:
        relay.hub.unregister(sid)
        relay.handle_disconnect(sid)
        await _stop_sender(sender)
        logger.info("User %s disconnected", sid)
