from __future__ import annotations

from typing import Any

from rest_framework import serializers

from itj_travel.users.models import User
from itj_travel.users.services import to_timestamp_ms


def location_payload(user: User) -> dict[str, Any] | None:
    if not user.has_location:
        return None
    return {
        "lat": float(user.last_latitude),
        "lng": float(user.last_longitude),
        "timestamp": to_timestamp_ms(user.last_location_at),
    }


class UserSerializer(serializers.ModelSerializer[User]):
    """Member as seen by the rest of the group (roster, detail, me)."""

    id = serializers.SerializerMethodField()
    groupId = serializers.SerializerMethodField()  # noqa: N815
    isOnline = serializers.BooleanField(source="is_online", read_only=True)  # noqa: N815
    isPanic = serializers.BooleanField(source="is_panic", read_only=True)  # noqa: N815
    location = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "phone",
            "role",
            "avatar",
            "groupId",
            "isOnline",
            "isPanic",
            "location",
        ]
        read_only_fields = fields

    def get_id(self, obj: User) -> str:
        return str(obj.pk)

    def get_groupId(self, obj: User) -> str | None:  # noqa: N802
        return str(obj.group_id) if obj.group_id else None

    def get_location(self, obj: User) -> dict[str, Any] | None:
        return location_payload(obj)


class LoginSerializer(serializers.Serializer):
    phone = serializers.CharField(max_length=20)
    password = serializers.CharField(trim_whitespace=False)


class ProfileUpdateSerializer(serializers.Serializer):
    avatar = serializers.CharField(allow_blank=True, trim_whitespace=False)


class LocationUpdateSerializer(serializers.Serializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)
