from django.conf import settings
from django.urls import include
from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from config.health import health as health_view
from itj_travel.itinerary.api.views import ItineraryViewSet
from itj_travel.notifications.api.views import NotificationViewSet
from itj_travel.panic.api.views import PanicAlertViewSet
from itj_travel.travel_groups.api.views import GroupSettingsView
from itj_travel.users.api.views import UserViewSet

router = DefaultRouter() if settings.DEBUG else SimpleRouter()

router.register("users", UserViewSet)
router.register("panic", PanicAlertViewSet, basename="panic")
router.register("itinerary", ItineraryViewSet, basename="itinerary")
router.register("notifications", NotificationViewSet, basename="notifications")


app_name = "api"
urlpatterns = [
    path("auth/", include("itj_travel.users.api.auth_urls")),
    path("groups/", include("itj_travel.travel_groups.api.urls")),
    path("push/", include("itj_travel.push.api.urls")),
    path("settings/", GroupSettingsView.as_view(), name="settings"),
    path("health/", health_view, name="health"),
    *router.urls,
]
