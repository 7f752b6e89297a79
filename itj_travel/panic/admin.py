from django.contrib import admin

from itj_travel.panic.models import PanicAlert


@admin.register(PanicAlert)
class PanicAlertAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "message", "is_resolved", "resolved_by", "created_at"]
    list_filter = ["is_resolved", "created_at"]
    search_fields = ["user__name", "user__phone", "message"]
    raw_id_fields = ["user", "resolved_by"]
