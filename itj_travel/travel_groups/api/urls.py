from django.urls import path

from .views import CurrentGroupView
from .views import JoinGroupView
from .views import LeaveGroupView

app_name = "groups"
urlpatterns = [
    path("", CurrentGroupView.as_view(), name="current"),
    path("join/", JoinGroupView.as_view(), name="join"),
    path("leave/", LeaveGroupView.as_view(), name="leave"),
]
