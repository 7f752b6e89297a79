from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class TravelGroupsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "itj_travel.travel_groups"
    verbose_name = _("Travel Groups")
