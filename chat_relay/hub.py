from __future__ import annotations

import asyncio
import logging
import uuid
from collections import defaultdict
from typing import Any, Dict, Optional, Set, Tuple

logger = logging.getLogger(__name__)

# NOTE: the hub never touches a socket directly. Every connection owns an
# outbox queue that the websocket router drains, so emitting is synchronous
# and a relay handler can never be suspended halfway through.


class ConnectionHub:
    """Tracks live connections and the named groups ("rooms") they belong to."""

    def __init__(self) -> None:
        # active connections: sid -> outbox of pending frames
        self.outboxes: Dict[str, asyncio.Queue] = {}
        # group name -> member sids
        self.groups: Dict[str, Set[str]] = defaultdict(set)

    # -------------------- Connection lifecycle -------------------- #

    def register(self) -> Tuple[str, asyncio.Queue]:
        sid = uuid.uuid4().hex
        outbox: asyncio.Queue = asyncio.Queue()
        self.outboxes[sid] = outbox
        return sid, outbox

    def unregister(self, sid: str) -> None:
        """Forget *sid* and drop it from every group it was part of."""
        self.outboxes.pop(sid, None)
        for room in self.rooms_of(sid):
            self.leave_room(sid, room)

    def connected(self, sid: str) -> bool:
        return sid in self.outboxes

    # -------------------- Group management -------------------- #

    def enter_room(self, sid: str, room: str) -> None:
        if sid not in self.outboxes:
            return
        self.groups[room].add(sid)

    def leave_room(self, sid: str, room: str) -> None:
        members = self.groups.get(room)
        if members is None:
            return
        members.discard(sid)
        if not members:
            del self.groups[room]

    def rooms_of(self, sid: str) -> Set[str]:
        return {room for room, members in self.groups.items() if sid in members}

    def members(self, room: str) -> Set[str]:
        return set(self.groups.get(room, ()))

    # -------------------- Emission helpers -------------------- #

    def send(self, sid: str, event: str, data: Any) -> None:
        """Queue *event* for a single connection; unknown sids are ignored."""
        outbox = self.outboxes.get(sid)
        if outbox is None:
            logger.debug("Dropping %s for unknown connection %s", event, sid)
            return
        outbox.put_nowait({"type": event, "data": data})

    def emit_to_room(self, room: str, event: str, data: Any, skip_sid: Optional[str] = None) -> None:
        """Queue *event* for every member of *room* except *skip_sid*."""
        for sid in list(self.groups.get(room, ())):
            if sid != skip_sid:
                self.send(sid, event, data)

    def broadcast(self, event: str, data: Any, skip_sid: Optional[str] = None) -> None:
        """Queue *event* for *every* live connection, regardless of room."""
        for sid in list(self.outboxes):
            if sid != skip_sid:
                self.send(sid, event, data)


__all__ = ["ConnectionHub"]
