from django.db import models
from django.utils.translation import gettext_lazy as _


class ItineraryItem(models.Model):
    group = models.ForeignKey(
        "travel_groups.TravelGroup",
        on_delete=models.CASCADE,
        related_name="itinerary",
    )
    day = models.PositiveSmallIntegerField()
    date = models.DateField()
    # Free-form "HH:MM" as entered by the guide.
    time = models.CharField(max_length=10)
    activity = models.CharField(max_length=255)
    location = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    icon = models.CharField(max_length=50, default="calendar")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["day", "time"]
        verbose_name = _("Itinerary item")

    def __str__(self) -> str:
        return f"Day {self.day} {self.time} {self.activity}"
