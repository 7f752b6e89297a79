from __future__ import annotations

from typing import TYPE_CHECKING

from itj_travel.realtime.payloads import build_panic_alert_payload
from itj_travel.realtime.socketio import publish_to_group
from itj_travel.realtime.socketio import router

if TYPE_CHECKING:  # import for type checking only
    from itj_travel.panic.models import PanicAlert


def publish_panic_raised(alert: PanicAlert) -> int:
    group_id = alert.user.group_id
    if not group_id:
        return 0
    return publish_to_group(
        router.publish_panic_raised,
        group_id,
        build_panic_alert_payload(alert),
    )


def publish_panic_resolved(alert: PanicAlert) -> int:
    group_id = alert.user.group_id
    if not group_id:
        return 0
    return publish_to_group(
        router.publish_panic_resolved,
        group_id,
        alert.pk,
        alert.user_id,
    )
