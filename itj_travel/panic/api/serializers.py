from __future__ import annotations

from typing import Any

from rest_framework import serializers

from itj_travel.panic.models import PanicAlert
from itj_travel.realtime.payloads import build_panic_alert_payload


class PanicAlertSerializer(serializers.ModelSerializer[PanicAlert]):
    """Alert history entry: the realtime payload plus who resolved it and when."""

    class Meta:
        model = PanicAlert
        fields = ["id"]

    def to_representation(self, instance: PanicAlert) -> dict[str, Any]:
        data = build_panic_alert_payload(instance)
        data["userPhone"] = instance.user.phone
        resolver = instance.resolved_by
        data["resolvedBy"] = (resolver.name or resolver.phone) if resolver else None
        data["resolvedAt"] = instance.resolved_at
        return data


class PanicAlertCreateSerializer(serializers.Serializer):
    message = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    # Coordinates are optional and anything unusable is stored as NULL.
    latitude = serializers.JSONField(required=False, allow_null=True)
    longitude = serializers.JSONField(required=False, allow_null=True)
