from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from itj_travel.notifications.models import Notification
from itj_travel.users.api.permissions import IsGroupGuideOrAdminCanWrite

from .serializers import NotificationCreateSerializer
from .serializers import NotificationSerializer


@extend_schema_view(
    list=extend_schema(tags=["Notifications"]),
    create=extend_schema(tags=["Notifications"], request=NotificationCreateSerializer),
)
class NotificationViewSet(mixins.ListModelMixin, GenericViewSet):
    """Notifications for the caller's group.

    - list: newest first
    - create: guides/admins post to their own group; members get it live
    """

    permission_classes = [IsAuthenticated, IsGroupGuideOrAdminCanWrite]
    serializer_class = NotificationSerializer
    pagination_class = None

    def get_queryset(self):
        group_id = self.request.user.group_id
        if not group_id:
            return Notification.objects.none()
        return Notification.objects.filter(group_id=group_id)

    def create(self, request, *args, **kwargs):
        group_id = request.user.group_id
        if not group_id:
            msg = "Anda tidak terdaftar dalam grup mana pun"
            raise ValidationError({"message": msg})
        serializer = NotificationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        # Broadcast happens from the post_save signal once the request commits.
        notification = Notification.objects.create(
            group_id=group_id,
            title=data["title"],
            content=data["content"],
            notification_type=data["type"],
        )
        out = NotificationSerializer(notification, context={"request": request}).data
        return Response(out, status=status.HTTP_201_CREATED)
