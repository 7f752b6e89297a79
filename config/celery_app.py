import os

from celery import Celery
from celery.signals import setup_logging

# Workers only run push fan-out; they default to production settings unless
# DJANGO_SETTINGS_MODULE is set (pytest passes config.settings.test via --ds).
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.production")

app = Celery("itj_travel")

# All celery-related configuration keys carry a `CELERY_` prefix in settings.
app.config_from_object("django.conf:settings", namespace="CELERY")


@setup_logging.connect
def config_loggers(*args, **kwargs):
    from logging.config import dictConfig  # noqa: PLC0415

    from django.conf import settings  # noqa: PLC0415

    dictConfig(settings.LOGGING)


# Picks up itj_travel.push.tasks.
app.autodiscover_tasks()
