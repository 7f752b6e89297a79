from unittest import mock

import pytest
from django.urls import reverse
from rest_framework import status

from itj_travel.users.tokens import verify_access_token
from tests.factories import DEFAULT_PASSWORD
from tests.factories import create_member

pytestmark = pytest.mark.django_db


class TestPhoneLogin:
    def test_login_returns_token_and_marks_online(self, api_client, member):
        response = api_client.post(
            reverse("api:auth:login"),
            {"phone": member.phone, "password": DEFAULT_PASSWORD},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Login berhasil"
        assert response.data["user"]["id"] == str(member.pk)
        assert response.data["user"]["groupId"] == str(member.group_id)
        claim = verify_access_token(response.data["token"])
        assert claim.group_id == str(member.group_id)
        member.refresh_from_db()
        assert member.is_online is True

    def test_unknown_phone(self, api_client):
        response = api_client.post(
            reverse("api:auth:login"),
            {"phone": "0899999999", "password": "x"},
            format="json",
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data["error_code"] == "USER_NOT_FOUND"

    def test_wrong_password(self, api_client, member):
        response = api_client.post(
            reverse("api:auth:login"),
            {"phone": member.phone, "password": "salah"},
            format="json",
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data["error_code"] == "INVALID_PASSWORD"

    def test_bearer_token_authenticates_rest_calls(self, api_client, member):
        login = api_client.post(
            reverse("api:auth:login"),
            {"phone": member.phone, "password": DEFAULT_PASSWORD},
            format="json",
        )
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['token']}")

        response = api_client.get(reverse("api:auth:me"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["phone"] == member.phone


def test_logout_clears_online_flag(client_for, member):
    member.is_online = True
    member.save()

    response = client_for(member).post(reverse("api:auth:logout"))

    assert response.status_code == status.HTTP_200_OK
    member.refresh_from_db()
    assert member.is_online is False


def test_me_requires_authentication(api_client):
    response = api_client.get(reverse("api:auth:me"))

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestRoster:
    def test_lists_only_own_group(self, client_for, member, peer, other_group):
        create_member(other_group)

        response = client_for(member).get(reverse("api:user-list"))

        assert response.status_code == status.HTTP_200_OK
        assert {row["id"] for row in response.data} == {str(member.pk), str(peer.pk)}

    def test_member_without_group_sees_nobody(self, client_for, member):
        loner = create_member(None)

        response = client_for(loner).get(reverse("api:user-list"))

        assert response.data == []

    def test_location_is_last_known_fix(self, client_for, member, peer):
        from itj_travel.users.services import record_location

        record_location(peer.pk, -6.175, 106.8272)

        response = client_for(member).get(reverse("api:user-detail", args=[peer.pk]))

        assert response.data["location"]["lat"] == -6.175
        assert response.data["location"]["lng"] == 106.8272
        assert response.data["isOnline"] is True

    def test_other_group_member_is_hidden(self, client_for, member, other_group):
        stranger = create_member(other_group)

        response = client_for(member).get(reverse("api:user-detail", args=[stranger.pk]))

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestProfileAndLocation:
    def test_profile_update_is_published_after_commit(
        self,
        client_for,
        member,
        django_capture_on_commit_callbacks,
    ):
        with (
            mock.patch("itj_travel.users.api.views.publish_profile_updated") as publish,
            django_capture_on_commit_callbacks(execute=True),
        ):
            response = client_for(member).put(
                reverse("api:user-profile"),
                {"avatar": "avatar-5"},
                format="json",
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"message": "Profile berhasil diupdate", "avatar": "avatar-5"}
        publish.assert_called_once()
        assert publish.call_args.args[0].avatar == "avatar-5"

    def test_location_post_stores_and_publishes(
        self,
        client_for,
        member,
        django_capture_on_commit_callbacks,
    ):
        with (
            mock.patch("itj_travel.users.api.views.publish_location_updated") as publish,
            django_capture_on_commit_callbacks(execute=True),
        ):
            response = client_for(member).post(
                reverse("api:user-location"),
                {"latitude": 21.4225, "longitude": 39.8262},
                format="json",
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["location"]["lat"] == 21.4225
        member.refresh_from_db()
        assert float(member.last_latitude) == 21.4225
        user, fix = publish.call_args.args
        assert user.pk == member.pk
        assert fix.lng == 39.8262

    @pytest.mark.parametrize(
        "body",
        [{"latitude": 91, "longitude": 0}, {"latitude": 0}, {"latitude": "x", "longitude": 1}],
    )
    def test_invalid_location_is_rejected(self, client_for, member, body):
        with mock.patch("itj_travel.users.api.views.publish_location_updated") as publish:
            response = client_for(member).post(reverse("api:user-location"), body, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        publish.assert_not_called()
