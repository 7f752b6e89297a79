from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from itj_travel.travel_groups import services
from itj_travel.travel_groups.models import TravelGroup
from itj_travel.users.api.permissions import IsGroupGuideOrAdminCanWrite
from itj_travel.users.tokens import issue_access_token

from .serializers import GroupSettingsSerializer
from .serializers import JoinGroupSerializer
from .serializers import TravelGroupDetailSerializer
from .serializers import TravelGroupSerializer


@extend_schema(tags=["Groups"])
class CurrentGroupView(APIView):
    """The caller's group with members and their last-known locations, or null."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        group_id = request.user.group_id
        group = TravelGroup.objects.filter(pk=group_id).first() if group_id else None
        if group is None:
            return Response(None)
        return Response(TravelGroupDetailSerializer(group, context={"request": request}).data)


@extend_schema(tags=["Groups"], request=JoinGroupSerializer)
class JoinGroupView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = JoinGroupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        group = services.find_joinable_group(serializer.validated_data["joinCode"])
        if group is None:
            return Response(
                {"message": "Kode gabung tidak valid atau grup tidak aktif"},
                status=status.HTTP_404_NOT_FOUND,
            )
        try:
            user = services.join_group(request.user, group)
        except services.MembershipError as exc:
            return Response({"message": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        # The client must reconnect its socket with this token to change rooms.
        return Response(
            {
                "message": "Berhasil bergabung ke grup",
                "token": issue_access_token(user),
                "group": TravelGroupSerializer(group, context={"request": request}).data,
            },
        )


@extend_schema(tags=["Groups"], request=None)
class LeaveGroupView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        try:
            user = services.leave_group(request.user)
        except services.MembershipError as exc:
            return Response({"message": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"message": "Berhasil keluar dari grup", "token": issue_access_token(user)})


@extend_schema(tags=["Settings"], request=GroupSettingsSerializer)
class GroupSettingsView(APIView):
    permission_classes = [IsAuthenticated, IsGroupGuideOrAdminCanWrite]

    def get(self, request):
        record = services.settings_for(request.user.group_id)
        return Response(GroupSettingsSerializer(record).data)

    def put(self, request):
        group_id = request.user.group_id
        if not group_id:
            msg = "You are not a member of any group."
            raise ValidationError({"message": msg})
        serializer = GroupSettingsSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        record = services.update_settings(group_id, **serializer.validated_data)
        return Response(
            {
                "message": "Pengaturan berhasil diupdate",
                **GroupSettingsSerializer(record).data,
            },
        )
