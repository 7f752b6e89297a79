"""Group membership changes and per-group settings."""

from __future__ import annotations

import logging

from django.db import transaction

from itj_travel.travel_groups.models import GroupSettings
from itj_travel.travel_groups.models import TravelGroup
from itj_travel.users.models import User

logger = logging.getLogger(__name__)


class MembershipError(Exception):
    """A join or leave that the user's current state does not allow."""


def find_joinable_group(join_code: str) -> TravelGroup | None:
    return TravelGroup.objects.filter(
        join_code=join_code.strip().upper(),
        is_active=True,
    ).first()


def join_group(user: User, group: TravelGroup) -> User:
    """Put ``user`` in ``group``.

    Existing socket connections keep their old room until the client
    reconnects with the token issued for the new membership.
    """

    with transaction.atomic():
        user = User.objects.select_for_update().get(pk=user.pk)
        if user.group_id:
            msg = "Anda sudah tergabung dalam grup lain. Keluar dari grup terlebih dahulu."
            raise MembershipError(msg)
        user.group = group
        user.save(update_fields=["group", "updated_at"])
    logger.info("User %s joined group %s", user.pk, group.pk)
    return user


def leave_group(user: User) -> User:
    with transaction.atomic():
        user = User.objects.select_for_update().get(pk=user.pk)
        if not user.group_id:
            msg = "Anda tidak tergabung dalam grup manapun"
            raise MembershipError(msg)
        if (user.role or "").lower() == User.Role.ADMIN:
            msg = "Admin tidak dapat meninggalkan grup. Transfer kepemilikan terlebih dahulu."
            raise MembershipError(msg)
        group_id = user.group_id
        user.group = None
        user.save(update_fields=["group", "updated_at"])
    logger.info("User %s left group %s", user.pk, group_id)
    return user


def settings_for(group_id: int | None) -> GroupSettings:
    """Stored settings for the group, or an unsaved instance holding defaults."""

    if group_id:
        existing = GroupSettings.objects.filter(group_id=group_id).first()
        if existing is not None:
            return existing
    return GroupSettings(group_id=group_id)


def update_settings(group_id: int, **values) -> GroupSettings:
    record, _ = GroupSettings.objects.update_or_create(group_id=group_id, defaults=values)
    return record
