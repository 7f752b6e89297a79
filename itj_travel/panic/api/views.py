from __future__ import annotations

from django.db import transaction
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from itj_travel.panic import services
from itj_travel.panic.models import PanicAlert
from itj_travel.push.tasks import queue_panic_push
from itj_travel.realtime.events.panic import publish_panic_raised
from itj_travel.realtime.events.panic import publish_panic_resolved

from .serializers import PanicAlertCreateSerializer
from .serializers import PanicAlertSerializer


@extend_schema_view(
    list=extend_schema(tags=["Panic"]),
    create=extend_schema(tags=["Panic"], request=PanicAlertCreateSerializer),
    resolve=extend_schema(tags=["Panic"], request=None),
)
class PanicAlertViewSet(mixins.ListModelMixin, GenericViewSet):
    """Panic alerts of the caller's group, newest first.

    - list: full history, the reconnect fetch for alert state
    - create: raise an alert, broadcast it and push it to the group
    - resolve: mark an alert resolved (owner or a resolver role)
    """

    permission_classes = [IsAuthenticated]
    serializer_class = PanicAlertSerializer
    pagination_class = None

    def get_queryset(self):
        user = self.request.user
        if not user.group_id:
            return PanicAlert.objects.none()
        return PanicAlert.objects.filter(user__group_id=user.group_id).select_related(
            "user",
            "resolved_by",
        )

    def create(self, request, *args, **kwargs):
        serializer = PanicAlertCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        user = request.user

        alert = services.raise_panic_alert(
            user.pk,
            message=data.get("message"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )
        transaction.on_commit(lambda: publish_panic_raised(alert))
        if user.group_id:
            transaction.on_commit(
                lambda: queue_panic_push(
                    user.group_id,
                    user.pk,
                    alert.user.name or alert.user.phone,
                    alert.message,
                ),
            )
        out = PanicAlertSerializer(alert, context={"request": request}).data
        return Response(out, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["put"])
    def resolve(self, request, pk=None):
        try:
            outcome = services.resolve_panic_alert(
                pk,
                resolver_id=request.user.pk,
                role=request.user.role,
                is_staff=request.user.is_staff,
            )
        except PanicAlert.DoesNotExist as exc:
            msg = "Alert tidak ditemukan"
            raise NotFound(msg) from exc
        transaction.on_commit(lambda: publish_panic_resolved(outcome.alert))
        return Response({"message": "Alert berhasil diselesaikan"})
