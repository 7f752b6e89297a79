from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class PushSubscription(models.Model):
    """The browser push subscription of one user (the latest one wins)."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="push_subscription",
    )
    # As produced by PushManager.subscribe(): {endpoint, keys: {p256dh, auth}}
    subscription = models.JSONField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Push subscription")

    def __str__(self) -> str:
        return f"PushSubscription({self.user_id})"

    @property
    def endpoint(self) -> str:
        return str(self.subscription.get("endpoint", ""))
