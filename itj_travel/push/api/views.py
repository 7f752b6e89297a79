from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from itj_travel.push import services
from itj_travel.push.tasks import send_group_push
from itj_travel.users.api.permissions import IsGroupGuideOrAdmin

from .serializers import SendToGroupSerializer
from .serializers import SubscribeSerializer


@extend_schema(tags=["Push"])
class VapidPublicKeyView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        if not services.is_configured():
            return Response(
                {"message": "Push notifications not configured"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response({"publicKey": settings.WEBPUSH_VAPID_PUBLIC_KEY})


@extend_schema(tags=["Push"], request=SubscribeSerializer)
class SubscribeView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = SubscribeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.save_subscription(request.user, serializer.validated_data["subscription"])
        return Response({"message": "Subscription saved successfully"})


@extend_schema(tags=["Push"])
class UnsubscribeView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        services.delete_subscription(request.user)
        return Response({"message": "Unsubscribed successfully"})


@extend_schema(tags=["Push"], request=SendToGroupSerializer)
class SendToGroupView(APIView):
    """Broadcast a push message to a group; delivery runs inline to report counts."""

    permission_classes = [IsAuthenticated, IsGroupGuideOrAdmin]

    def post(self, request):
        serializer = SendToGroupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        report = send_group_push(str(data["groupId"]), data["title"], data["body"])
        return Response({"message": "Notifications sent", **report})
