from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from itj_travel.users.models import User
from itj_travel.users.services import set_online
from itj_travel.users.tokens import issue_access_token

from .serializers import LoginSerializer
from .serializers import UserSerializer

logger = logging.getLogger(__name__)


@extend_schema(tags=["Authentication"], request=LoginSerializer)
class PhoneLoginView(APIView):
    """Exchange phone + password for an access token carrying group claims.

    The same token authenticates REST calls (``Authorization: Bearer``) and the
    Socket.IO handshake.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        phone = serializer.validated_data["phone"].strip()
        password = serializer.validated_data["password"]

        if not User.objects.filter(phone=phone).exists():
            return Response(
                {
                    "message": "Nomor telepon tidak terdaftar",
                    "error_code": "USER_NOT_FOUND",
                },
                status=status.HTTP_401_UNAUTHORIZED,
            )
        user = authenticate(request, phone=phone, password=password)
        if user is None:
            return Response(
                {
                    "message": "Password yang Anda masukkan salah",
                    "error_code": "INVALID_PASSWORD",
                },
                status=status.HTTP_401_UNAUTHORIZED,
            )

        set_online(user, online=True)
        logger.info("User %s logged in", user.pk)
        return Response(
            {
                "message": "Login berhasil",
                "token": issue_access_token(user),
                "user": UserSerializer(user, context={"request": request}).data,
            },
        )


@extend_schema(tags=["Authentication"], request=None)
class LogoutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        set_online(request.user, online=False)
        return Response({"message": "Logout berhasil"})


@extend_schema(tags=["Authentication"])
class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = UserSerializer(request.user, context={"request": request})
        return Response(serializer.data)
