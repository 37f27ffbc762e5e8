"""Room membership and broadcast routing.

``ChatRelay`` turns inbound transport events into directory updates and
outbound emissions. It is completely framework-agnostic: it only talks to a
``ConnectionHub`` and a ``UserDirectory``, and the websocket router feeds it
decoded frames. Every handler is synchronous, so each inbound event is
processed to completion before the next one starts.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, Optional

from pydantic import ValidationError

from .constants import (
    ADMIN,
    EVENT_ACTIVITY,
    EVENT_ENTER_ROOM,
    EVENT_MESSAGE,
    EVENT_ROOM_LIST,
    EVENT_USER_LIST,
    WELCOME_TEXT,
)
from .directory import UserDirectory
from .hub import ConnectionHub
from .schemas import (
    ChatMessage,
    EnterRoomRequest,
    Frame,
    RoomList,
    SendMessageRequest,
    UserList,
)

logger = logging.getLogger(__name__)


def format_time(moment: datetime) -> str:
    """Render *moment* as ``h:MM:SS AM`` without a leading zero on the hour."""
    return moment.strftime("%I:%M:%S %p").lstrip("0")


class ChatRelay:
    """Owns the user directory and routes every event to the right audience."""

    def __init__(
        self,
        hub: ConnectionHub,
        directory: Optional[UserDirectory] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.hub = hub
        self.directory = directory if directory is not None else UserDirectory()
        self.clock = clock

    # ---------------------------------------------------------------------
    # Payload builders
    # ---------------------------------------------------------------------

    def build_message(self, name: str, text: str) -> dict:
        return ChatMessage(name=name, text=text, time=format_time(self.clock())).model_dump()

    def _user_list(self, room: str) -> dict:
        return UserList(users=self.directory.users_in_room(room)).model_dump()

    def _room_list(self) -> dict:
        return RoomList(rooms=self.directory.active_rooms()).model_dump()

    # ---------------------------------------------------------------------
    # Lifecycle events
    # ---------------------------------------------------------------------

    def handle_connect(self, sid: str) -> None:
        # No directory entry yet: membership starts with "enter-room".
        self.hub.send(sid, EVENT_MESSAGE, self.build_message(ADMIN, WELCOME_TEXT))

    def handle_disconnect(self, sid: str) -> None:
        user = self.directory.get(sid)
        self.directory.remove(sid)
        if user is None:
            return

        logger.info("%s left %s", user.name, user.room)
        self.hub.emit_to_room(
            user.room, EVENT_MESSAGE, self.build_message(ADMIN, f"{user.name} has left the room")
        )
        self.hub.emit_to_room(user.room, EVENT_USER_LIST, self._user_list(user.room))
        self.hub.broadcast(EVENT_ROOM_LIST, self._room_list())

    # ---------------------------------------------------------------------
    # Client events
    # ---------------------------------------------------------------------

    def handle_enter_room(self, sid: str, name: str, room: str) -> None:
        previous = self.directory.get(sid)
        prev_room = previous.room if previous else None

        if prev_room is not None:
            self.hub.leave_room(sid, prev_room)
            self.hub.emit_to_room(
                prev_room, EVENT_MESSAGE, self.build_message(ADMIN, f"{previous.name} has left the room")
            )

        user = self.directory.activate(sid, name, room)

        # Roster for the old room must be taken after the overwrite above.
        if prev_room is not None:
            self.hub.emit_to_room(prev_room, EVENT_USER_LIST, self._user_list(prev_room))

        self.hub.enter_room(sid, user.room)
        logger.info("%s entered %s", user.name, user.room)

        self.hub.send(
            sid, EVENT_MESSAGE, self.build_message(ADMIN, f"You have joined the {user.room} chat room")
        )
        self.hub.emit_to_room(
            user.room,
            EVENT_MESSAGE,
            self.build_message(ADMIN, f"{user.name} has joined the room"),
            skip_sid=sid,
        )
        self.hub.emit_to_room(user.room, EVENT_USER_LIST, self._user_list(user.room))
        self.hub.broadcast(EVENT_ROOM_LIST, self._room_list())

    def handle_message(self, sid: str, name: str, text: str) -> None:
        user = self.directory.get(sid)
        if user is None:
            logger.debug("Dropping message from %s: not in a room", sid)
            return
        self.hub.emit_to_room(user.room, EVENT_MESSAGE, self.build_message(name, text))

    def handle_activity(self, sid: str, name: str) -> None:
        user = self.directory.get(sid)
        if user is None:
            logger.debug("Dropping activity from %s: not in a room", sid)
            return
        self.hub.emit_to_room(user.room, EVENT_ACTIVITY, name, skip_sid=sid)

    # ---------------------------------------------------------------------
    # Inbound frame dispatch
    # ---------------------------------------------------------------------

    def dispatch(self, sid: str, raw: str) -> None:
        """Decode one text frame from *sid* and route it.

        Anything that is not a well-formed frame for a known event is logged
        and dropped; nothing raised here may end the connection.
        """
        try:
            frame = Frame.model_validate(json.loads(raw))
        except (ValueError, RecursionError, ValidationError) as e:
            logger.warning("Malformed frame from %s: %s", sid, e)
            return

        try:
            self._route(sid, frame.type, frame.data)
        except ValidationError as e:
            logger.warning("Invalid %r payload from %s: %s", frame.type, sid, e)

    def _route(self, sid: str, msg_type: str, data: Any) -> None:
        if msg_type == EVENT_ENTER_ROOM:
            req = EnterRoomRequest.model_validate(data)
            self.handle_enter_room(sid, req.name, req.room)
        elif msg_type == EVENT_MESSAGE:
            msg = SendMessageRequest.model_validate(data)
            self.handle_message(sid, msg.name, msg.text)
        elif msg_type == EVENT_ACTIVITY:
            if not isinstance(data, str):
                logger.warning("Invalid activity payload from %s: %r", sid, data)
                return
            self.handle_activity(sid, data)
        else:
            logger.warning("Unknown event %r from %s", msg_type, sid)


__all__ = ["ChatRelay", "format_time"]
