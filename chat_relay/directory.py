"""In-memory registry of who is in which room.

Unlike a module-level singleton, a ``UserDirectory`` is constructed
explicitly and owned by exactly one relay instance, so several
independent relays (e.g. one per test) can coexist in a process.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from .schemas import User


class UserDirectory:
    """Maps connection id → ``User``.

    Rooms are never stored; they are projected from the current users
    every time they are requested.
    """

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}

    def activate(self, sid: str, name: str, room: str) -> User:
        """Install a fresh ``User`` for *sid*, discarding whatever was there."""
        self._users.pop(sid, None)
        user = User(id=sid, name=name, room=room)
        self._users[sid] = user
        return user

    def remove(self, sid: str) -> None:
        self._users.pop(sid, None)

    def get(self, sid: str) -> Optional[User]:
        return self._users.get(sid)

    def users_in_room(self, room: str) -> List[User]:
        return [u for u in self._users.values() if u.room == room]

    def active_rooms(self) -> List[str]:
        """Distinct rooms with at least one member, in first-seen order."""
        return list(dict.fromkeys(u.room for u in self._users.values()))

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, sid: object) -> bool:
        return sid in self._users


__all__ = ["UserDirectory"]
