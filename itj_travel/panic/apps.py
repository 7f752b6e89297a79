from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class PanicConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "itj_travel.panic"
    verbose_name = _("Panic Alerts")
