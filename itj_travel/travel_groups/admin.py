from django.contrib import admin

from itj_travel.travel_groups.models import GroupSettings
from itj_travel.travel_groups.models import TravelGroup


class GroupSettingsInline(admin.StackedInline):
    model = GroupSettings
    can_delete = False


@admin.register(TravelGroup)
class TravelGroupAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "destination", "join_code", "departure_date", "is_active"]
    list_filter = ["is_active", "departure_date"]
    search_fields = ["name", "destination", "join_code"]
    inlines = [GroupSettingsInline]
