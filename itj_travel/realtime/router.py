"""Validate inbound realtime events, persist them and fan them out to rooms.

The router holds no state of its own besides in-flight push dispatches: room
membership comes from the registry and durable state from the store, both
injected so tests can substitute them.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING
from typing import Any

from asgiref.sync import sync_to_async

from itj_travel.panic.services import parse_alert_id
from itj_travel.realtime import payloads
from itj_travel.realtime.exceptions import AlertNotFound
from itj_travel.realtime.exceptions import EventRejected
from itj_travel.realtime.exceptions import InvalidPayload
from itj_travel.realtime.exceptions import NotAttached
from itj_travel.realtime.exceptions import StoreUnavailable
from itj_travel.users.services import coerce_coordinate

if TYPE_CHECKING:  # import for type checking only
    from collections.abc import Awaitable
    from collections.abc import Callable

    from itj_travel.realtime.connections import Connection
    from itj_travel.realtime.registry import PresenceRoomRegistry
    from itj_travel.realtime.store import DurableStateStore
    from itj_travel.realtime.store import PanicRecord

    Emit = Callable[[str, dict[str, Any], str], Awaitable[Any]]
    DispatchPanicPush = Callable[[str, str, str, str], Any]

logger = logging.getLogger(__name__)


def parse_location(data: Any) -> tuple[float, float]:
    if not isinstance(data, dict):
        msg = "location-update payload must be an object"
        raise InvalidPayload(msg)
    lat = coerce_coordinate(data.get("latitude"), limit=90)
    lng = coerce_coordinate(data.get("longitude"), limit=180)
    if lat is None or lng is None:
        msg = f"unusable coordinates {data.get('latitude')!r}, {data.get('longitude')!r}"
        raise InvalidPayload(msg)
    return lat, lng


def parse_panic_alert(data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = "panic-alert payload must be an object"
        raise InvalidPayload(msg)
    alert = data.get("alert")
    if alert is None:
        return {}
    if not isinstance(alert, dict):
        msg = "panic-alert 'alert' must be an object"
        raise InvalidPayload(msg)
    return alert


def _nack(exc: EventRejected) -> dict[str, Any]:
    return {"ok": False, "error": exc.code}


class RealtimeEventRouter:
    def __init__(
        self,
        registry: PresenceRoomRegistry,
        store: DurableStateStore,
        emit: Emit,
        dispatch_panic_push: DispatchPanicPush | None = None,
    ) -> None:
        self._registry = registry
        self._store = store
        self._emit = emit
        self._dispatch_panic_push = dispatch_panic_push
        self._background: set[asyncio.Task] = set()

    async def broadcast(
        self,
        group_id: str | int,
        event: str,
        payload: dict[str, Any],
        *,
        skip_subject: str | None = None,
    ) -> int:
        """Emit ``event`` to every connection in the group's room.

        With ``skip_subject`` set, all connections of that user are left out.
        A failed emit to one connection is logged and does not stop delivery
        to the others. Returns the number of connections reached.
        """

        delivered = 0
        for connection_id in self._registry.members_of(group_id):
            if skip_subject is not None and self._registry.subject_of(connection_id) == str(
                skip_subject,
            ):
                continue
            try:
                await self._emit(event, payload, connection_id)
            except Exception:
                logger.exception("Failed to emit %s to socket %s", event, connection_id)
            else:
                delivered += 1
        return delivered

    async def handle_location_update(self, connection: Connection, data: Any) -> None:
        try:
            lat, lng = parse_location(data)
        except InvalidPayload as exc:
            logger.debug("Dropped location-update from %s: %s", connection.subject_id, exc)
            return

        try:
            fix = await self._store.record_location(connection.subject_id, lat, lng)
        except StoreUnavailable:
            logger.exception("Could not store location for user %s", connection.subject_id)
            return
        except EventRejected as exc:
            logger.warning("Dropped location-update from %s: %s", connection.subject_id, exc)
            return

        if not connection.attached:
            logger.debug("User %s has no group, location not broadcast", connection.subject_id)
            return
        await self.publish_location_updated(
            connection.group_id,
            connection.subject_id,
            payloads.build_location_payload(connection.subject_id, fix),
        )

    async def handle_panic_alert(self, connection: Connection, data: Any) -> dict[str, Any]:
        """Raise (or re-broadcast a still open) panic alert; returns the sender's ack."""

        if not connection.attached:
            return _nack(NotAttached())
        try:
            alert = parse_panic_alert(data)
        except InvalidPayload as exc:
            logger.info("Dropped panic-alert from %s: %s", connection.subject_id, exc)
            return _nack(exc)

        try:
            record = await self._store.raise_panic_alert(
                connection.subject_id,
                alert_id=alert.get("id"),
                message=alert.get("message"),
                latitude=alert.get("lat"),
                longitude=alert.get("lng"),
            )
        except StoreUnavailable as exc:
            logger.exception("Could not store panic alert for user %s", connection.subject_id)
            return _nack(exc)
        except EventRejected as exc:
            logger.info("Dropped panic-alert from %s: %s", connection.subject_id, exc)
            return _nack(exc)

        await self.publish_panic_raised(connection.group_id, record.payload)
        if record.created:
            self._schedule_panic_push(connection.group_id, connection.subject_id, record)
        return {"ok": True, "alert": record.payload}

    async def handle_panic_resolved(self, connection: Connection, data: Any) -> dict[str, Any]:
        alert_id = parse_alert_id(data.get("alertId")) if isinstance(data, dict) else None
        if alert_id is None:
            logger.info("Dropped panic-resolved from %s: no alert id", connection.subject_id)
            return _nack(AlertNotFound())
        try:
            resolved = await self._store.resolve_panic_alert(
                alert_id,
                connection.subject_id,
                connection.role,
            )
        except StoreUnavailable as exc:
            logger.exception("Could not resolve panic alert %s", alert_id)
            return _nack(exc)
        except EventRejected as exc:
            logger.info(
                "Dropped panic-resolved from %s for alert %s: %s",
                connection.subject_id,
                alert_id,
                exc,
            )
            return _nack(exc)

        # A repeat resolve is broadcast again so late peers still converge.
        if resolved.owner_group_id is not None:
            await self.publish_panic_resolved(
                resolved.owner_group_id,
                resolved.alert_id,
                resolved.owner_id,
            )
        return {"ok": True, "alertId": resolved.alert_id}

    async def publish_location_updated(
        self,
        group_id: str | int,
        subject_id: str | int,
        payload: dict[str, Any],
    ) -> int:
        return await self.broadcast(
            group_id,
            payloads.USER_LOCATION_UPDATED,
            payload,
            skip_subject=str(subject_id),
        )

    async def publish_panic_raised(self, group_id: str | int, payload: dict[str, Any]) -> int:
        return await self.broadcast(group_id, payloads.NEW_PANIC_ALERT, payload)

    async def publish_panic_resolved(
        self,
        group_id: str | int,
        alert_id: str | int,
        owner_id: str | int,
    ) -> int:
        return await self.broadcast(
            group_id,
            payloads.PANIC_ALERT_RESOLVED,
            payloads.build_panic_resolved_payload(alert_id, owner_id),
        )

    async def publish_profile_updated(
        self,
        group_id: str | int,
        subject_id: str | int,
        avatar: str,
    ) -> int:
        return await self.broadcast(
            group_id,
            payloads.USER_PROFILE_UPDATED,
            payloads.build_profile_payload(subject_id, avatar),
        )

    async def publish_notification(self, group_id: str | int, payload: dict[str, Any]) -> int:
        return await self.broadcast(group_id, payloads.NEW_NOTIFICATION, payload)

    def _schedule_panic_push(self, group_id: str, subject_id: str, record: PanicRecord) -> None:
        if self._dispatch_panic_push is None:
            return
        task = asyncio.get_running_loop().create_task(
            self._dispatch_push(group_id, subject_id, record),
        )
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _dispatch_push(self, group_id: str, subject_id: str, record: PanicRecord) -> None:
        try:
            await sync_to_async(self._dispatch_panic_push, thread_sensitive=False)(
                group_id,
                subject_id,
                record.user_name,
                record.message,
            )
        except Exception:
            logger.exception("Panic push dispatch failed for alert %s", record.payload["id"])

    async def drain(self) -> None:
        """Wait for in-flight push dispatches (tests and shutdown)."""

        while self._background:
            await asyncio.gather(*tuple(self._background), return_exceptions=True)
