from django.contrib import admin
from django.contrib.auth import admin as auth_admin
from django.utils.translation import gettext_lazy as _

from itj_travel.users.models import User
from itj_travel.users.models import UserLocation


@admin.register(User)
class UserAdmin(auth_admin.UserAdmin):
    fieldsets = (
        (None, {"fields": ("username", "password")}),
        (_("Personal info"), {"fields": ("name", "phone", "email", "avatar")}),
        (_("Travel"), {"fields": ("group", "role", "is_online", "is_panic")}),
        (
            _("Last known location"),
            {"fields": ("last_latitude", "last_longitude", "last_location_at")},
        ),
        (
            _("Permissions"),
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
            },
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "phone", "name", "role", "group", "password1", "password2"),
            },
        ),
    )
    list_display = ["username", "name", "phone", "role", "group", "is_online", "is_panic"]
    list_filter = ["role", "is_online", "is_panic", "group"]
    search_fields = ["name", "phone", "username"]


@admin.register(UserLocation)
class UserLocationAdmin(admin.ModelAdmin):
    list_display = ["id", "user", "latitude", "longitude", "recorded_at"]
    list_filter = ["recorded_at"]
    search_fields = ["user__name", "user__phone"]
