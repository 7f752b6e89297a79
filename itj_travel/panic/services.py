"""Raise and resolve panic alerts while keeping ``User.is_panic`` consistent.

Shared by the REST views and the realtime store; neither path writes panic
state any other way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.db import transaction
from django.utils import timezone

from itj_travel.panic.models import PanicAlert
from itj_travel.users.models import User
from itj_travel.users.services import coerce_coordinate

logger = logging.getLogger(__name__)

COORDINATE_QUANTUM = Decimal("0.00000001")


@dataclass(frozen=True)
class ResolveOutcome:
    alert: PanicAlert
    newly_resolved: bool


def default_message() -> str:
    return settings.DEFAULT_PANIC_MESSAGE


def clean_message(message: object) -> str:
    if isinstance(message, str) and message.strip():
        return message.strip()
    return default_message()


def coerce_alert_coordinate(value: object, *, limit: float) -> Decimal | None:
    """Coordinates on an alert are optional; anything unusable becomes NULL."""

    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return None
    number = coerce_coordinate(value, limit=limit)
    if number is None:
        return None
    return Decimal(str(number)).quantize(COORDINATE_QUANTUM)


def parse_alert_id(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def resolver_roles() -> set[str]:
    return {role.lower() for role in settings.PANIC_RESOLVER_ROLES}


def can_resolve(
    alert: PanicAlert,
    *,
    resolver_id: int | str,
    role: str | None,
    is_staff: bool = False,
) -> bool:
    if str(alert.user_id) == str(resolver_id):
        return True
    if is_staff:
        return True
    return (role or "").lower() in resolver_roles()


def refresh_panic_flag(user_id: int | str) -> bool:
    """Recompute ``is_panic`` from the user's unresolved alerts."""

    in_panic = PanicAlert.objects.filter(user_id=user_id, is_resolved=False).exists()
    User.objects.filter(pk=user_id).update(is_panic=in_panic)
    return in_panic


def raise_panic_alert(
    user_id: int | str,
    *,
    message: object = None,
    latitude: object = None,
    longitude: object = None,
) -> PanicAlert:
    with transaction.atomic():
        alert = PanicAlert.objects.create(
            user_id=user_id,
            message=clean_message(message),
            latitude=coerce_alert_coordinate(latitude, limit=90),
            longitude=coerce_alert_coordinate(longitude, limit=180),
        )
        User.objects.filter(pk=user_id).update(is_panic=True)
    logger.info("Panic alert %s raised by user %s", alert.pk, user_id)
    return PanicAlert.objects.select_related("user").get(pk=alert.pk)


def get_owned_alert(alert_id: object, user_id: int | str) -> PanicAlert | None:
    pk = parse_alert_id(alert_id)
    if pk is None:
        return None
    return (
        PanicAlert.objects.select_related("user")
        .filter(pk=pk, user_id=user_id)
        .first()
    )


def resolve_panic_alert(
    alert_id: object,
    *,
    resolver_id: int | str,
    role: str | None,
    is_staff: bool = False,
) -> ResolveOutcome:
    """Mark an alert resolved.

    Raises ``PanicAlert.DoesNotExist`` for unknown ids and ``PermissionDenied``
    when the resolver neither owns the alert nor holds a resolver role. A
    repeat resolve keeps the original resolver and timestamp.
    """

    pk = parse_alert_id(alert_id)
    if pk is None:
        msg = f"Panic alert {alert_id!r} does not exist"
        raise PanicAlert.DoesNotExist(msg)

    with transaction.atomic():
        alert = PanicAlert.objects.select_for_update().get(pk=pk)
        if not can_resolve(alert, resolver_id=resolver_id, role=role, is_staff=is_staff):
            msg = "You are not allowed to resolve this alert"
            raise PermissionDenied(msg)
        newly_resolved = not alert.is_resolved
        if newly_resolved:
            alert.is_resolved = True
            alert.resolved_by_id = resolver_id
            alert.resolved_at = timezone.now()
            alert.save(update_fields=["is_resolved", "resolved_by", "resolved_at"])
        refresh_panic_flag(alert.user_id)

    if newly_resolved:
        logger.info("Panic alert %s resolved by user %s", alert.pk, resolver_id)
    return ResolveOutcome(alert=alert, newly_resolved=newly_resolved)
