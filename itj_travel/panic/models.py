from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from itj_travel.users.models import LATITUDE_FIELD
from itj_travel.users.models import LONGITUDE_FIELD


class PanicAlert(models.Model):
    """An emergency raised by a group member.

    Alerts are resolved at most once and never deleted by the application;
    ``User.is_panic`` mirrors whether any unresolved alert remains.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="panic_alerts",
    )
    message = models.TextField(blank=True, default="")
    latitude = models.DecimalField(null=True, blank=True, **LATITUDE_FIELD)
    longitude = models.DecimalField(null=True, blank=True, **LONGITUDE_FIELD)
    is_resolved = models.BooleanField(default=False)
    resolved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="resolved_panic_alerts",
    )
    resolved_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name = _("Panic alert")

    def __str__(self) -> str:
        state = "resolved" if self.is_resolved else "open"
        return f"PanicAlert#{self.pk} ({self.user_id}, {state})"
