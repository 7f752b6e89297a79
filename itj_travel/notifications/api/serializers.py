from __future__ import annotations

from typing import Any

from rest_framework import serializers

from itj_travel.notifications.models import Notification
from itj_travel.realtime.payloads import build_notification_payload


class NotificationSerializer(serializers.ModelSerializer[Notification]):
    """Read serializer; the same shape as the ``new-notification`` event."""

    class Meta:
        model = Notification
        fields = ["id"]

    def to_representation(self, instance: Notification) -> dict[str, Any]:
        return build_notification_payload(instance)


class NotificationCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    content = serializers.CharField()
    type = serializers.ChoiceField(
        choices=Notification.Type.choices,
        required=False,
        default=Notification.Type.INFO,
    )
