from django.contrib import admin

from itj_travel.notifications import models


@admin.register(models.Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["id", "group", "title", "content", "notification_type"]
    search_fields = ["title", "content"]
    list_filter = ["notification_type", "group", "created_at"]
