from django.db import transaction
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework.decorators import action
from rest_framework.mixins import ListModelMixin
from rest_framework.mixins import RetrieveModelMixin
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from itj_travel.realtime.events.location import publish_location_updated
from itj_travel.realtime.events.profile import publish_profile_updated
from itj_travel.users.models import User
from itj_travel.users.services import record_location
from itj_travel.users.services import update_avatar

from .serializers import LocationUpdateSerializer
from .serializers import ProfileUpdateSerializer
from .serializers import UserSerializer


@extend_schema_view(
    list=extend_schema(tags=["Users"]),
    retrieve=extend_schema(tags=["Users"]),
    profile=extend_schema(tags=["Users"], request=ProfileUpdateSerializer),
    location=extend_schema(tags=["Users"], request=LocationUpdateSerializer),
)
class UserViewSet(RetrieveModelMixin, ListModelMixin, GenericViewSet):
    serializer_class = UserSerializer
    queryset = User.objects.all()
    # The roster is a plain list; groups are small.
    pagination_class = None

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        user = self.request.user
        if not user.group_id:
            return User.objects.none()
        return User.objects.filter(group_id=user.group_id)

    @action(detail=False, methods=["put"])
    def profile(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = update_avatar(request.user, serializer.validated_data["avatar"])
        transaction.on_commit(lambda: publish_profile_updated(user))
        return Response({"message": "Profile berhasil diupdate", "avatar": user.avatar})

    @action(detail=False, methods=["post"])
    def location(self, request):
        serializer = LocationUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = request.user
        fix = record_location(
            user.pk,
            serializer.validated_data["latitude"],
            serializer.validated_data["longitude"],
        )
        transaction.on_commit(lambda: publish_location_updated(user, fix))
        return Response(
            {"message": "Lokasi berhasil diupdate", "location": fix.as_payload()},
        )
