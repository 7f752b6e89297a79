from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ItineraryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "itj_travel.itinerary"
    verbose_name = _("Itinerary")
