"""Live mapping of group rooms to the connections attached to them.

The registry is derived state: it is never persisted and starts empty on
every process start (all clients reconnect). It is touched by connect,
disconnect and every broadcast, from the event loop as well as from sync
Django threads publishing through ``async_to_sync``, so all access goes
through one lock.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # import for type checking only
    from collections.abc import Iterator


def room_for_group(group_id: int | str) -> str:
    return f"group-{group_id}"


@dataclass(frozen=True)
class _Attachment:
    group_id: str
    subject_id: str


class PresenceRoomRegistry:
    def __init__(self) -> None:
        self._rooms: dict[str, set[str]] = {}
        self._attachments: dict[str, _Attachment] = {}
        self._lock = threading.RLock()

    def attach(self, connection_id: str, group_id: int | str, subject_id: str) -> None:
        """Put ``connection_id`` in the room for ``group_id``.

        Re-attaching to the same room is a no-op; attaching to another room
        moves the connection so it is never in two rooms at once.
        """

        key = str(group_id)
        with self._lock:
            current = self._attachments.get(connection_id)
            if current is not None and current.group_id == key:
                return
            if current is not None:
                self._discard(connection_id, current.group_id)
            self._rooms.setdefault(key, set()).add(connection_id)
            self._attachments[connection_id] = _Attachment(key, subject_id)

    def detach(self, connection_id: str) -> str | None:
        """Remove ``connection_id`` from its room; returns the group it left."""

        with self._lock:
            current = self._attachments.pop(connection_id, None)
            if current is None:
                return None
            self._discard(connection_id, current.group_id)
            return current.group_id

    def _discard(self, connection_id: str, group_id: str) -> None:
        members = self._rooms.get(group_id)
        if members is None:
            return
        members.discard(connection_id)
        if not members:
            # Empty rooms are dropped; the next attach recreates them.
            del self._rooms[group_id]

    def members_of(self, group_id: int | str) -> Iterator[str]:
        """Connection ids in the room, as of the moment of the call."""

        with self._lock:
            snapshot = tuple(self._rooms.get(str(group_id), ()))
        return iter(snapshot)

    def room_of(self, connection_id: str) -> str | None:
        with self._lock:
            current = self._attachments.get(connection_id)
        return current.group_id if current else None

    def subject_of(self, connection_id: str) -> str | None:
        with self._lock:
            current = self._attachments.get(connection_id)
        return current.subject_id if current else None

    def rooms(self) -> dict[str, int]:
        with self._lock:
            return {group_id: len(members) for group_id, members in self._rooms.items()}

    def __contains__(self, connection_id: object) -> bool:
        with self._lock:
            return connection_id in self._attachments

    def __len__(self) -> int:
        with self._lock:
            return len(self._attachments)
