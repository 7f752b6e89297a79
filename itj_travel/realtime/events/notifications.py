from __future__ import annotations

from typing import TYPE_CHECKING

from itj_travel.realtime.payloads import build_notification_payload
from itj_travel.realtime.socketio import publish_to_group
from itj_travel.realtime.socketio import router

if TYPE_CHECKING:  # import for type checking only
    from itj_travel.notifications.models import Notification


def publish_notification_created(notification: Notification) -> int:
    """Publish a newly created group Notification to the group's room."""

    return publish_to_group(
        router.publish_notification,
        notification.group_id,
        build_notification_payload(notification),
    )
