from django.db import models
from django.utils.translation import gettext_lazy as _


class Notification(models.Model):
    """A message from the guides to everyone in a travel group."""

    class Type(models.TextChoices):
        INFO = "info", _("Info")
        WARNING = "warning", _("Warning")
        SUCCESS = "success", _("Success")

    group = models.ForeignKey(
        "travel_groups.TravelGroup",
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    title = models.CharField(max_length=255)
    content = models.TextField()
    notification_type = models.CharField(
        max_length=20,
        choices=Type.choices,
        default=Type.INFO,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.title} - {self.group}"
