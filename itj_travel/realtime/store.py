"""Async facade over the durable services used by the event router.

Every call runs the sync ORM service in a worker thread via
``database_sync_to_async`` and is bounded by ``REALTIME_STORE_TIMEOUT``. A
timeout only stops the handler from waiting: the write may still commit,
which is why the router skips its broadcast rather than retrying.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from channels.db import database_sync_to_async
from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.db import DatabaseError

from itj_travel.panic import services as panic_services
from itj_travel.panic.models import PanicAlert
from itj_travel.realtime.exceptions import AlertAlreadyResolved
from itj_travel.realtime.exceptions import AlertNotFound
from itj_travel.realtime.exceptions import ResolveNotPermitted
from itj_travel.realtime.exceptions import StoreUnavailable
from itj_travel.realtime.exceptions import UnknownSubject
from itj_travel.realtime.payloads import build_panic_alert_payload
from itj_travel.users.models import User
from itj_travel.users.services import LocationFix
from itj_travel.users.services import record_location


@dataclass(frozen=True)
class PanicRecord:
    """An alert as broadcast to the room, plus what the push fan-out needs."""

    payload: dict[str, Any]
    created: bool
    user_name: str
    message: str


@dataclass(frozen=True)
class ResolvedAlert:
    alert_id: str
    owner_id: str
    owner_group_id: str | None
    newly_resolved: bool


def _panic_record(alert: PanicAlert, *, created: bool) -> PanicRecord:
    return PanicRecord(
        payload=build_panic_alert_payload(alert),
        created=created,
        user_name=alert.user.name or alert.user.phone,
        message=alert.message,
    )


def _raise_or_replay(subject_id, alert_id, message, latitude, longitude) -> PanicRecord:
    if alert_id is not None:
        existing = panic_services.get_owned_alert(alert_id, subject_id)
        if existing is not None:
            if existing.is_resolved:
                raise AlertAlreadyResolved
            return _panic_record(existing, created=False)
    alert = panic_services.raise_panic_alert(
        subject_id,
        message=message,
        latitude=latitude,
        longitude=longitude,
    )
    return _panic_record(alert, created=True)


def _resolve(alert_id, resolver_id, role) -> ResolvedAlert:
    outcome = panic_services.resolve_panic_alert(
        alert_id,
        resolver_id=resolver_id,
        role=role,
    )
    alert = outcome.alert
    owner_group_id = (
        User.objects.filter(pk=alert.user_id).values_list("group_id", flat=True).first()
    )
    return ResolvedAlert(
        alert_id=str(alert.pk),
        owner_id=str(alert.user_id),
        owner_group_id=str(owner_group_id) if owner_group_id else None,
        newly_resolved=outcome.newly_resolved,
    )


class DurableStateStore:
    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        if self._timeout is not None:
            return self._timeout
        return settings.REALTIME_STORE_TIMEOUT

    async def _call(self, func, *args):
        try:
            return await asyncio.wait_for(
                database_sync_to_async(func)(*args),
                timeout=self.timeout,
            )
        except TimeoutError as exc:
            msg = f"{func.__name__} did not finish within {self.timeout}s"
            raise StoreUnavailable(msg) from exc
        except DatabaseError as exc:
            raise StoreUnavailable(str(exc)) from exc

    async def record_location(self, subject_id: str, lat: float, lng: float) -> LocationFix:
        try:
            return await self._call(record_location, subject_id, lat, lng)
        except User.DoesNotExist as exc:
            raise UnknownSubject(str(exc)) from exc

    async def raise_panic_alert(
        self,
        subject_id: str,
        *,
        alert_id: object = None,
        message: object = None,
        latitude: object = None,
        longitude: object = None,
    ) -> PanicRecord:
        return await self._call(
            _raise_or_replay,
            subject_id,
            alert_id,
            message,
            latitude,
            longitude,
        )

    async def resolve_panic_alert(
        self,
        alert_id: object,
        resolver_id: str,
        role: str,
    ) -> ResolvedAlert:
        try:
            return await self._call(_resolve, alert_id, resolver_id, role)
        except PanicAlert.DoesNotExist as exc:
            raise AlertNotFound(str(exc)) from exc
        except PermissionDenied as exc:
            raise ResolveNotPermitted(str(exc)) from exc
