"""Web Push delivery to group members via pywebpush."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from django.conf import settings
from pywebpush import WebPushException
from pywebpush import webpush

from itj_travel.push.models import PushSubscription

logger = logging.getLogger(__name__)

ICON = "/icons/icon-192x192.png"
BADGE = "/icons/badge-72x72.png"
PANIC_TITLE = "\U0001f6a8 PANIC ALERT!"
PANIC_FALLBACK_BODY = "Membutuhkan bantuan segera!"
# Push services answer 404/410 once a subscription has been revoked.
GONE_STATUSES = {404, 410}


@dataclass
class DeliveryReport:
    sent: int = 0
    failed: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"sent": self.sent, "failed": self.failed}


def is_configured() -> bool:
    return bool(settings.WEBPUSH_VAPID_PUBLIC_KEY and settings.WEBPUSH_VAPID_PRIVATE_KEY)


def save_subscription(user, subscription: dict[str, Any]) -> PushSubscription:
    record, _ = PushSubscription.objects.update_or_create(
        user=user,
        defaults={"subscription": subscription},
    )
    return record


def delete_subscription(user) -> int:
    deleted, _ = PushSubscription.objects.filter(user=user).delete()
    return deleted


def group_payload(title: str, body: str) -> dict[str, Any]:
    return {
        "title": title,
        "body": body,
        "icon": ICON,
        "badge": BADGE,
        "data": {"url": "/"},
    }


def panic_payload(user_name: str, message: str | None) -> dict[str, Any]:
    return {
        "title": PANIC_TITLE,
        "body": f"{user_name}: {message or PANIC_FALLBACK_BODY}",
        "icon": ICON,
        "badge": BADGE,
        "tag": "panic-alert",
        "requireInteraction": True,
        "data": {"url": "/tracking", "type": "panic"},
    }


def _send_one(record: PushSubscription, data: str) -> bool:
    try:
        webpush(
            subscription_info=record.subscription,
            data=data,
            vapid_private_key=settings.WEBPUSH_VAPID_PRIVATE_KEY,
            vapid_claims={"sub": settings.WEBPUSH_VAPID_CLAIM_EMAIL},
        )
    except WebPushException as exc:
        status = getattr(exc.response, "status_code", None)
        if status in GONE_STATUSES:
            logger.info("Dropping expired push subscription of user %s", record.user_id)
            record.delete()
        else:
            logger.warning("Push to user %s failed: %s", record.user_id, exc)
        return False
    return True


def send_to_group(
    group_id: int | str,
    payload: dict[str, Any],
    *,
    exclude_user_id: int | str | None = None,
) -> DeliveryReport:
    """Deliver ``payload`` to every subscribed member of the group.

    Failures are counted per subscription and never raised.
    """

    report = DeliveryReport()
    if not is_configured():
        logger.info("Web Push is not configured, skipping push to group %s", group_id)
        return report

    subscriptions = PushSubscription.objects.filter(user__group_id=group_id).select_related(
        "user",
    )
    if exclude_user_id is not None:
        subscriptions = subscriptions.exclude(user_id=exclude_user_id)

    data = json.dumps(payload)
    for record in subscriptions:
        if _send_one(record, data):
            report.sent += 1
        else:
            report.failed += 1
    logger.info(
        "Push to group %s: %s sent, %s failed",
        group_id,
        report.sent,
        report.failed,
    )
    return report
