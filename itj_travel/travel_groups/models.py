from django.db import models
from django.utils.translation import gettext_lazy as _


class TravelGroup(models.Model):
    """A travel party: the unit of membership, broadcast audience and settings."""

    name = models.CharField(max_length=255)
    destination = models.CharField(max_length=100, blank=True)
    join_code = models.CharField(max_length=10, unique=True, null=True, blank=True)
    departure_date = models.DateField()
    return_date = models.DateField()
    departure_airport = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-departure_date", "name"]
        verbose_name = _("Travel group")

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        # Join codes are matched case-insensitively by storing them uppercased.
        if self.join_code:
            self.join_code = self.join_code.strip().upper()
        super().save(*args, **kwargs)


class GroupSettings(models.Model):
    """Per-group tracking configuration read by every member's client."""

    DEFAULT_TRACKING_INTERVAL = 30
    DEFAULT_RADIUS_LIMIT = 500

    group = models.OneToOneField(
        TravelGroup,
        on_delete=models.CASCADE,
        related_name="settings",
    )
    is_gps_active = models.BooleanField(default=True)
    # seconds between client location samples
    tracking_interval = models.PositiveIntegerField(default=DEFAULT_TRACKING_INTERVAL)
    # meters from the group before a member is flagged as far away
    radius_limit = models.PositiveIntegerField(default=DEFAULT_RADIUS_LIMIT)
    is_app_active = models.BooleanField(default=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Group settings")
        verbose_name_plural = _("Group settings")

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Settings({self.group_id})"
