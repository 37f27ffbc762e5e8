"""Pydantic data schemas used across the relay.

This module centralises the wire models so that the relay, the hub and
the websocket router all import from a single location.
"""
from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field, StrictStr

# -----------------------------
# Runtime
# -----------------------------

class User(BaseModel):
    """A connection that has entered a room under a display name."""

    id: str  # connection identifier issued by the hub
    name: str
    room: str


# -----------------------------
# Outbound payloads
# -----------------------------

class ChatMessage(BaseModel):
    name: str
    text: str
    time: str  # pre-formatted by the server, e.g. "9:05:07 PM"


class UserList(BaseModel):
    users: List[User] = []


class RoomList(BaseModel):
    rooms: List[str] = []


# -----------------------------
# Inbound payloads
# -----------------------------

class EnterRoomRequest(BaseModel):
    name: StrictStr = Field(min_length=1)
    room: StrictStr = Field(min_length=1)


class SendMessageRequest(BaseModel):
    name: StrictStr = Field(min_length=1)
    text: StrictStr = Field(min_length=1)


class Frame(BaseModel):
    """Envelope for every websocket frame, in both directions."""

    type: StrictStr
    data: Any = None


__all__ = [
    "User",
    "ChatMessage",
    "UserList",
    "RoomList",
    "EnterRoomRequest",
    "SendMessageRequest",
    "Frame",
]
