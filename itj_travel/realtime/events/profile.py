from __future__ import annotations

from typing import TYPE_CHECKING

from itj_travel.realtime.socketio import publish_to_group
from itj_travel.realtime.socketio import router

if TYPE_CHECKING:  # import for type checking only
    from itj_travel.users.models import User


def publish_profile_updated(user: User) -> int:
    if not user.group_id:
        return 0
    return publish_to_group(
        router.publish_profile_updated,
        user.group_id,
        user.pk,
        user.avatar,
    )
