"""Admission, room assignment and cleanup of Socket.IO connections."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from typing import TYPE_CHECKING

from django.utils import timezone

from itj_travel.realtime.exceptions import AdmissionError
from itj_travel.realtime.registry import room_for_group
from itj_travel.users.tokens import TokenVerificationError
from itj_travel.users.tokens import verify_access_token

if TYPE_CHECKING:  # import for type checking only
    from collections.abc import Callable

    from itj_travel.realtime.registry import PresenceRoomRegistry
    from itj_travel.users.tokens import IdentityClaim

logger = logging.getLogger(__name__)

REASON_TOKEN_MISSING = "Authentication error: Token missing"
REASON_TOKEN_INVALID = "Authentication error: Invalid token"
REASON_TOKEN_EXPIRED = "Authentication error: Token expired"


@dataclass(frozen=True)
class Connection:
    """One admitted socket. A reconnect always produces a new Connection."""

    connection_id: str
    subject_id: str
    group_id: str | None
    role: str
    connected_at: datetime = field(default_factory=timezone.now)

    @property
    def attached(self) -> bool:
        return self.group_id is not None


class ConnectionManager:
    def __init__(
        self,
        registry: PresenceRoomRegistry,
        verify: Callable[[str | None], IdentityClaim] = verify_access_token,
    ) -> None:
        self._registry = registry
        self._verify = verify
        self._connections: dict[str, Connection] = {}
        self._lock = threading.Lock()

    def admit(self, connection_id: str, credential: str | None) -> Connection:
        """Verify ``credential`` and register the connection.

        The connection is attached to its group room before this returns, so
        no event from it is ever processed while it is half set up.
        """

        if not credential:
            logger.info("Refused socket %s: no token", connection_id)
            raise AdmissionError(REASON_TOKEN_MISSING)
        try:
            claim = self._verify(credential)
        except TokenVerificationError as exc:
            logger.info("Refused socket %s: %s", connection_id, exc)
            reason = REASON_TOKEN_EXPIRED if exc.expired else REASON_TOKEN_INVALID
            raise AdmissionError(reason) from exc

        connection = Connection(
            connection_id=connection_id,
            subject_id=claim.subject_id,
            group_id=claim.group_id,
            role=claim.role,
        )
        with self._lock:
            self._connections[connection_id] = connection
        if connection.attached:
            self._registry.attach(connection_id, connection.group_id, claim.subject_id)
            logger.info(
                "Socket %s (user %s) joined %s",
                connection_id,
                claim.subject_id,
                room_for_group(connection.group_id),
            )
        else:
            logger.info(
                "Socket %s (user %s) has no group, not joining any room",
                connection_id,
                claim.subject_id,
            )
        return connection

    def get(self, connection_id: str) -> Connection | None:
        with self._lock:
            return self._connections.get(connection_id)

    def release(self, connection_id: str) -> Connection | None:
        """Forget a connection on any kind of disconnect.

        The durable ``is_online`` flag is left alone: it follows
        login/logout, not socket presence.
        """

        with self._lock:
            connection = self._connections.pop(connection_id, None)
        self._registry.detach(connection_id)
        if connection is not None:
            logger.info("Socket %s (user %s) disconnected", connection_id, connection.subject_id)
        return connection

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)
