from django.urls import path

from .views import SendToGroupView
from .views import SubscribeView
from .views import UnsubscribeView
from .views import VapidPublicKeyView

app_name = "push"
urlpatterns = [
    path("vapid-public-key/", VapidPublicKeyView.as_view(), name="vapid-public-key"),
    path("subscribe/", SubscribeView.as_view(), name="subscribe"),
    path("unsubscribe/", UnsubscribeView.as_view(), name="unsubscribe"),
    path("send-to-group/", SendToGroupView.as_view(), name="send-to-group"),
]
