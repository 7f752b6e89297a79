"""Outbound event names and payload builders.

Every id crosses the wire as a string; timestamps are epoch milliseconds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from itj_travel.users.services import to_timestamp_ms

if TYPE_CHECKING:  # import for type checking only
    from itj_travel.notifications.models import Notification
    from itj_travel.panic.models import PanicAlert
    from itj_travel.users.services import LocationFix

USER_LOCATION_UPDATED = "user-location-updated"
NEW_PANIC_ALERT = "new-panic-alert"
PANIC_ALERT_RESOLVED = "panic-alert-resolved"
USER_PROFILE_UPDATED = "user-profile-updated"
NEW_NOTIFICATION = "new-notification"


def _coordinate(value) -> float:
    return float(value) if value is not None else 0.0


def build_location_payload(subject_id: str, fix: LocationFix) -> dict[str, Any]:
    return {"userId": str(subject_id), "location": fix.as_payload()}


def build_panic_alert_payload(alert: PanicAlert) -> dict[str, Any]:
    user = alert.user
    return {
        "id": str(alert.pk),
        "userId": str(alert.user_id),
        "userName": user.name or user.phone,
        "message": alert.message,
        "location": {
            "lat": _coordinate(alert.latitude),
            "lng": _coordinate(alert.longitude),
        },
        "isResolved": alert.is_resolved,
        "timestamp": to_timestamp_ms(alert.created_at),
    }


def build_panic_resolved_payload(alert_id: str, subject_id: str) -> dict[str, str]:
    return {"alertId": str(alert_id), "userId": str(subject_id)}


def build_profile_payload(subject_id: str, avatar: str) -> dict[str, str]:
    return {"userId": str(subject_id), "avatar": avatar}


def build_notification_payload(notification: Notification) -> dict[str, Any]:
    return {
        "id": str(notification.pk),
        "title": notification.title,
        "content": notification.content,
        "type": notification.notification_type,
        "timestamp": to_timestamp_ms(notification.created_at),
    }
