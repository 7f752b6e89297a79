from __future__ import annotations

from typing import TYPE_CHECKING

from itj_travel.realtime.payloads import build_location_payload
from itj_travel.realtime.socketio import publish_to_group
from itj_travel.realtime.socketio import router

if TYPE_CHECKING:  # import for type checking only
    from itj_travel.users.models import User
    from itj_travel.users.services import LocationFix


def publish_location_updated(user: User, fix: LocationFix) -> int:
    """Tell the rest of the user's group where they are now."""

    if not user.group_id:
        return 0
    return publish_to_group(
        router.publish_location_updated,
        user.group_id,
        user.pk,
        build_location_payload(user.pk, fix),
    )
