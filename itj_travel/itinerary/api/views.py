from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from itj_travel.itinerary.models import ItineraryItem
from itj_travel.users.api.permissions import IsGroupGuideOrAdminCanWrite

from .serializers import ItineraryItemSerializer


@extend_schema_view(
    list=extend_schema(tags=["Itinerary"]),
    create=extend_schema(tags=["Itinerary"]),
    destroy=extend_schema(tags=["Itinerary"]),
    day=extend_schema(tags=["Itinerary"]),
)
class ItineraryViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    GenericViewSet,
):
    """Itinerary of the caller's group; guides and admins edit their own group only."""

    permission_classes = [IsAuthenticated, IsGroupGuideOrAdminCanWrite]
    serializer_class = ItineraryItemSerializer
    pagination_class = None

    def get_queryset(self):
        group_id = self.request.user.group_id
        if not group_id:
            return ItineraryItem.objects.none()
        return ItineraryItem.objects.filter(group_id=group_id)

    def perform_create(self, serializer):
        group_id = self.request.user.group_id
        if not group_id:
            msg = "Anda tidak terdaftar dalam grup mana pun"
            raise ValidationError({"message": msg})
        serializer.save(group_id=group_id)

    @action(detail=False, methods=["get"], url_path=r"day/(?P<day>\d+)")
    def day(self, request, day=None):
        items = self.get_queryset().filter(day=int(day))
        return Response(self.get_serializer(items, many=True).data)
