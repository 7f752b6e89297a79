from __future__ import annotations

from typing import Any

from rest_framework import serializers


class SubscribeSerializer(serializers.Serializer):
    subscription = serializers.JSONField()

    def validate_subscription(self, value: Any) -> dict[str, Any]:
        if not isinstance(value, dict) or not value.get("endpoint"):
            msg = "Invalid subscription"
            raise serializers.ValidationError(msg)
        return value


class SendToGroupSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    body = serializers.CharField()
    groupId = serializers.IntegerField(min_value=1)  # noqa: N815
