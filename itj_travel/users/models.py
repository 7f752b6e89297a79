from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import CharField
from django.utils.translation import gettext_lazy as _

# Stored with the precision of a consumer GPS fix (~1 mm).
LATITUDE_FIELD = {"max_digits": 10, "decimal_places": 8}
LONGITUDE_FIELD = {"max_digits": 11, "decimal_places": 8}


class User(AbstractUser):
    """
    Default custom user model for itj_travel.

    Besides identity, a user carries the durable presence state other members
    see on reconnect: last-known position and the online/panic flags.
    """

    class Role(models.TextChoices):
        JAMAAH = "jamaah", _("Jamaah")
        PEMBIMBING = "pembimbing", _("Pembimbing")
        ADMIN = "admin", _("Admin")

    # First and last name do not cover name patterns around the globe
    name = CharField(_("Name of User"), blank=True, max_length=255)
    phone = CharField(_("Phone"), max_length=20, unique=True)
    role = CharField(max_length=20, choices=Role.choices, default=Role.JAMAAH)
    avatar = models.TextField(blank=True, default="")
    group = models.ForeignKey(
        "travel_groups.TravelGroup",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="members",
    )

    # Driven by login/logout and accepted location updates, never by socket
    # presence; it can lag behind the realtime view.
    is_online = models.BooleanField(default=False)
    # True iff at least one unresolved PanicAlert exists for this user.
    is_panic = models.BooleanField(default=False)

    last_latitude = models.DecimalField(null=True, blank=True, **LATITUDE_FIELD)
    last_longitude = models.DecimalField(null=True, blank=True, **LONGITUDE_FIELD)
    last_location_at = models.DateTimeField(null=True, blank=True)

    # Audit timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name or self.phone or self.username

    @property
    def is_group_guide(self) -> bool:
        return self.role in {self.Role.ADMIN, self.Role.PEMBIMBING}

    @property
    def has_location(self) -> bool:
        return self.last_latitude is not None and self.last_longitude is not None


class UserLocation(models.Model):
    """Append-only location history kept for audit; never read by the realtime core."""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="locations")
    latitude = models.DecimalField(**LATITUDE_FIELD)
    longitude = models.DecimalField(**LONGITUDE_FIELD)
    recorded_at = models.DateTimeField(db_index=True)

    class Meta:
        ordering = ["-recorded_at"]

    def __str__(self) -> str:  # pragma: no cover - simple repr
        return f"UserLocation({self.user_id}@{self.recorded_at})"
