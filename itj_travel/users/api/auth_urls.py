from django.urls import path

from .auth_views import LogoutView
from .auth_views import MeView
from .auth_views import PhoneLoginView

app_name = "auth"
urlpatterns = [
    path("login/", PhoneLoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
]
