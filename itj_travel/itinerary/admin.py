from django.contrib import admin

from itj_travel.itinerary.models import ItineraryItem


@admin.register(ItineraryItem)
class ItineraryItemAdmin(admin.ModelAdmin):
    list_display = ["id", "group", "day", "date", "time", "activity", "location"]
    list_filter = ["group", "day"]
    search_fields = ["activity", "location", "description"]
