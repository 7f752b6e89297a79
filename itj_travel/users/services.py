"""Durable write path for a user's presence state.

Both the REST views and the realtime store call into these functions so the
last-known location and the online flag have a single writer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from itj_travel.users.models import User
from itj_travel.users.models import UserLocation

COORDINATE_QUANTUM = Decimal("0.00000001")


@dataclass(frozen=True)
class LocationFix:
    """A position exactly as it was written to the store."""

    lat: float
    lng: float
    recorded_at: datetime

    @property
    def timestamp_ms(self) -> int:
        return to_timestamp_ms(self.recorded_at)

    def as_payload(self) -> dict[str, float | int]:
        return {"lat": self.lat, "lng": self.lng, "timestamp": self.timestamp_ms}


def to_timestamp_ms(value: datetime | None) -> int | None:
    if value is None:
        return None
    return int(value.timestamp() * 1000)


def coerce_coordinate(value: object, *, limit: float) -> float | None:
    """Return ``value`` as a finite float within ``[-limit, limit]`` or None."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number) or abs(number) > limit:
        return None
    return number


def _quantize(value: float) -> Decimal:
    return Decimal(str(value)).quantize(COORDINATE_QUANTUM)


def record_location(user_id: int | str, lat: float, lng: float) -> LocationFix:
    """Overwrite the user's last-known location and mark them online.

    Out-of-order updates are not rejected: whichever write lands last wins.
    """

    recorded_at = timezone.now()
    latitude = _quantize(lat)
    longitude = _quantize(lng)
    with transaction.atomic():
        updated = User.objects.filter(pk=user_id).update(
            last_latitude=latitude,
            last_longitude=longitude,
            last_location_at=recorded_at,
            is_online=True,
        )
        if not updated:
            msg = f"User {user_id} does not exist"
            raise User.DoesNotExist(msg)
        UserLocation.objects.create(
            user_id=user_id,
            latitude=latitude,
            longitude=longitude,
            recorded_at=recorded_at,
        )
    return LocationFix(lat=float(latitude), lng=float(longitude), recorded_at=recorded_at)


def update_avatar(user: User, avatar: str) -> User:
    user.avatar = avatar
    user.save(update_fields=["avatar", "updated_at"])
    return user


def set_online(user: User, *, online: bool) -> None:
    if user.is_online != online:
        user.is_online = online
        user.save(update_fields=["is_online", "updated_at"])
