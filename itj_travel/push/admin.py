from django.contrib import admin

from itj_travel.push.models import PushSubscription


@admin.register(PushSubscription)
class PushSubscriptionAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "endpoint", "updated_at"]
    search_fields = ["user__name", "user__phone"]
    raw_id_fields = ["user"]
