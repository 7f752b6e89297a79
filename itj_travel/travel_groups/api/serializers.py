from __future__ import annotations

from rest_framework import serializers

from itj_travel.travel_groups.models import GroupSettings
from itj_travel.travel_groups.models import TravelGroup
from itj_travel.users.api.serializers import UserSerializer


class TravelGroupSerializer(serializers.ModelSerializer[TravelGroup]):
    id = serializers.SerializerMethodField()
    departureDate = serializers.DateField(source="departure_date", read_only=True)  # noqa: N815
    returnDate = serializers.DateField(source="return_date", read_only=True)  # noqa: N815
    departureAirport = serializers.CharField(  # noqa: N815
        source="departure_airport",
        read_only=True,
    )
    isActive = serializers.BooleanField(source="is_active", read_only=True)  # noqa: N815
    memberCount = serializers.SerializerMethodField()  # noqa: N815

    class Meta:
        model = TravelGroup
        fields = [
            "id",
            "name",
            "destination",
            "departureDate",
            "returnDate",
            "departureAirport",
            "isActive",
            "memberCount",
        ]
        read_only_fields = fields

    def get_id(self, obj: TravelGroup) -> str:
        return str(obj.pk)

    def get_memberCount(self, obj: TravelGroup) -> int:  # noqa: N802
        return obj.members.count()


class TravelGroupDetailSerializer(TravelGroupSerializer):
    """Current group with the roster, used by clients to reconcile after (re)connect."""

    members = serializers.SerializerMethodField()

    class Meta(TravelGroupSerializer.Meta):
        fields = [*TravelGroupSerializer.Meta.fields, "members"]
        read_only_fields = fields

    def get_members(self, obj: TravelGroup) -> list[dict]:
        members = obj.members.order_by("name")
        return UserSerializer(members, many=True, context=self.context).data


class JoinGroupSerializer(serializers.Serializer):
    joinCode = serializers.CharField(max_length=10)  # noqa: N815


class GroupSettingsSerializer(serializers.ModelSerializer[GroupSettings]):
    isGpsActive = serializers.BooleanField(source="is_gps_active", required=False)  # noqa: N815
    trackingInterval = serializers.IntegerField(  # noqa: N815
        source="tracking_interval",
        min_value=1,
        required=False,
    )
    radiusLimit = serializers.IntegerField(  # noqa: N815
        source="radius_limit",
        min_value=1,
        required=False,
    )
    isAppActive = serializers.BooleanField(source="is_app_active", required=False)  # noqa: N815

    class Meta:
        model = GroupSettings
        fields = ["isGpsActive", "trackingInterval", "radiusLimit", "isAppActive"]
