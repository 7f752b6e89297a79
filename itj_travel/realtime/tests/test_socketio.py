from unittest import mock

import pytest
import socketio
from asgiref.sync import async_to_sync

from itj_travel.realtime import socketio as realtime_socketio
from itj_travel.realtime.socketio import _extract_token
from itj_travel.realtime.socketio import publish_to_group
from itj_travel.users.tokens import issue_access_token


def asgi_environ(query=b"", headers=()):
    return {"asgi.scope": {"type": "websocket", "query_string": query, "headers": list(headers)}}


def test_token_prefers_auth_payload():
    environ = asgi_environ(query=b"token=from-query", headers=[(b"token", b"from-header")])

    assert _extract_token(environ, {"token": "from-auth"}) == "from-auth"


def test_token_falls_back_to_header_then_query():
    with_header = asgi_environ(query=b"token=from-query", headers=[(b"Token", b"from-header")])
    query_only = asgi_environ(query=b"EIO=4&token=from-query")

    assert _extract_token(with_header, None) == "from-header"
    assert _extract_token(query_only, {"token": ""}) == "from-query"


def test_token_from_wsgi_style_environ():
    environ = {"HTTP_TOKEN": "from-header", "QUERY_STRING": "token=from-query"}

    assert _extract_token(environ, None) == "from-header"
    assert _extract_token({"QUERY_STRING": "token=from-query"}, None) == "from-query"


def test_no_token_anywhere():
    assert _extract_token(asgi_environ(query=b"EIO=4"), None) is None
    assert _extract_token(asgi_environ(), "not-a-dict") is None


def test_publish_to_group_swallows_failures():
    async def broken(*args):
        msg = "no server"
        raise RuntimeError(msg)

    with mock.patch.object(realtime_socketio, "logger") as logger:
        assert publish_to_group(broken, "7") == 0

    logger.exception.assert_called_once()


def test_publish_to_group_returns_delivery_count():
    async def publisher(group_id, payload):
        return 3

    assert publish_to_group(publisher, "7", {}) == 3


@pytest.mark.django_db
def test_connect_refuses_bad_token():
    with pytest.raises(socketio.exceptions.ConnectionRefusedError) as excinfo:
        async_to_sync(realtime_socketio.connect)("sid-x", asgi_environ(), {"token": "junk"})

    assert excinfo.value.error_args["message"] == "Authentication error: Invalid token"
    assert realtime_socketio.connections.get("sid-x") is None


@pytest.mark.django_db
def test_connect_and_disconnect_track_the_room(member):
    token = issue_access_token(member)

    async_to_sync(realtime_socketio.connect)("sid-y", asgi_environ(), {"token": token})
    try:
        assert realtime_socketio.registry.room_of("sid-y") == str(member.group_id)
    finally:
        async_to_sync(realtime_socketio.disconnect)("sid-y", "client disconnect")

    assert "sid-y" not in realtime_socketio.registry
