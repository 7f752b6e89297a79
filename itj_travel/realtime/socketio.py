"""Global Socket.IO server for the mobile/web client.

Client convention:
- URL base: ws://<host>:8000, default Socket.IO path (`/socket.io/`)
- Auth: `auth.token`, else a `token` header, else `query.token`
  (JWT access token issued by `/api/auth/login/` or a group join/leave)

Every connection carrying a `groupId` claim joins that group's room. Inbound
events are handed to the router; REST views and signals publish through
`publish_to_group` from sync code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any
from urllib.parse import parse_qs

import socketio
from asgiref.sync import async_to_sync
from django.conf import settings

from itj_travel.push.tasks import queue_panic_push
from itj_travel.realtime.connections import ConnectionManager
from itj_travel.realtime.exceptions import AdmissionError
from itj_travel.realtime.registry import PresenceRoomRegistry
from itj_travel.realtime.router import RealtimeEventRouter
from itj_travel.realtime.store import DurableStateStore

if TYPE_CHECKING:  # import for type checking only
    from collections.abc import Awaitable
    from collections.abc import Callable

logger = logging.getLogger(__name__)


def _cors_allowed_origins() -> str | list[str]:
    origins = list(settings.REALTIME_CORS_ALLOWED_ORIGINS)
    return "*" if origins == ["*"] else origins


sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins=_cors_allowed_origins(),
    # One client's events are handled in arrival order.
    async_handlers=False,
    logger=False,
    engineio_logger=False,
)


async def _emit_to_socket(event: str, payload: dict[str, Any], sid: str) -> None:
    await sio.emit(event, payload, to=sid)


registry = PresenceRoomRegistry()
connections = ConnectionManager(registry)
router = RealtimeEventRouter(
    registry,
    DurableStateStore(),
    _emit_to_socket,
    dispatch_panic_push=queue_panic_push,
)


def _header(scope: dict[str, Any], name: bytes) -> str | None:
    for key, value in scope.get("headers") or ():
        if key.lower() == name:
            return value.decode(errors="ignore")
    return None


def _extract_token(environ: dict[str, Any], auth: Any | None) -> str | None:
    """Extract the JWT from the Socket.IO handshake.

    Handles python-socketio environ shapes across ASGI/WSGI servers.
    """

    # `auth: { token }` is what socket.io-client sends by default.
    if isinstance(auth, dict):
        auth_token = auth.get("token")
        if isinstance(auth_token, str) and auth_token:
            return auth_token

    scope: Any = environ
    if isinstance(environ, dict) and "asgi.scope" in environ:
        inner = environ.get("asgi.scope")
        if isinstance(inner, dict):
            scope = inner
    if not isinstance(scope, dict):
        return None

    header_token = environ.get("HTTP_TOKEN") if isinstance(environ, dict) else None
    if not header_token and "headers" in scope:
        header_token = _header(scope, b"token")
    if isinstance(header_token, str) and header_token:
        return header_token

    query_string: str | bytes = ""
    if "query_string" in scope:
        query_string = scope.get("query_string", b"")
    elif "QUERY_STRING" in scope:
        query_string = scope.get("QUERY_STRING", "")

    if isinstance(query_string, (bytes, bytearray)):
        query_string = query_string.decode(errors="ignore")

    token = parse_qs(str(query_string)).get("token", [None])[0]
    if isinstance(token, str) and token:
        return token
    return None


@sio.event
async def connect(sid: str, environ: dict[str, Any], auth: Any | None = None):
    token = _extract_token(environ, auth)
    try:
        connections.admit(sid, token)
    except AdmissionError as exc:
        raise socketio.exceptions.ConnectionRefusedError(exc.reason) from exc


@sio.event
async def disconnect(sid: str, *args: Any):
    connections.release(sid)


@sio.on("location-update")
async def location_update(sid: str, data: Any = None):
    connection = connections.get(sid)
    if connection is None:
        return
    await router.handle_location_update(connection, data)


@sio.on("panic-alert")
async def panic_alert(sid: str, data: Any = None):
    connection = connections.get(sid)
    if connection is None:
        return None
    return await router.handle_panic_alert(connection, data)


@sio.on("panic-resolved")
async def panic_resolved(sid: str, data: Any = None):
    connection = connections.get(sid)
    if connection is None:
        return None
    return await router.handle_panic_resolved(connection, data)


def publish_to_group(publisher: Callable[..., Awaitable[int]], *args: Any) -> int:
    """Run one of the router's ``publish_*`` coroutines from sync Django code.

    Meant for ``transaction.on_commit`` callbacks: a failed broadcast is logged
    and never propagates into the request that triggered it.
    """

    try:
        return async_to_sync(publisher)(*args)
    except Exception:
        name = getattr(publisher, "__name__", publisher)
        logger.exception("Realtime publish via %s failed", name)
        return 0
