from rest_framework import serializers

from itj_travel.itinerary.models import ItineraryItem


class ItineraryItemSerializer(serializers.ModelSerializer[ItineraryItem]):
    class Meta:
        model = ItineraryItem
        fields = ["id", "day", "date", "time", "activity", "location", "description", "icon"]
        read_only_fields = ["id"]
        extra_kwargs = {"day": {"min_value": 1}}
