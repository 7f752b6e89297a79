from unittest import mock

import pytest
from django.urls import reverse
from rest_framework import status

from itj_travel.push.models import PushSubscription

pytestmark = pytest.mark.django_db

SUBSCRIPTION = {
    "endpoint": "https://push.example.com/abc",
    "keys": {"p256dh": "key", "auth": "secret"},
}


def test_public_key_unconfigured(api_client):
    response = api_client.get(reverse("api:push:vapid-public-key"))

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.data == {"message": "Push notifications not configured"}


def test_public_key_is_public(api_client, settings):
    settings.WEBPUSH_VAPID_PUBLIC_KEY = "public"
    settings.WEBPUSH_VAPID_PRIVATE_KEY = "private"

    response = api_client.get(reverse("api:push:vapid-public-key"))

    assert response.data == {"publicKey": "public"}


def test_subscribe_and_unsubscribe(client_for, member):
    client = client_for(member)

    response = client.post(
        reverse("api:push:subscribe"),
        {"subscription": SUBSCRIPTION},
        format="json",
    )
    assert response.status_code == status.HTTP_200_OK
    assert PushSubscription.objects.get(user=member).subscription == SUBSCRIPTION

    response = client.post(reverse("api:push:unsubscribe"))
    assert response.status_code == status.HTTP_200_OK
    assert not PushSubscription.objects.filter(user=member).exists()


@pytest.mark.parametrize("subscription", [{}, {"keys": {}}, "https://push.example.com"])
def test_subscribe_requires_endpoint(client_for, member, subscription):
    response = client_for(member).post(
        reverse("api:push:subscribe"),
        {"subscription": subscription},
        format="json",
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_send_to_group_reports_counts(client_for, guide):
    with mock.patch(
        "itj_travel.push.tasks.send_to_group",
        return_value=mock.Mock(as_dict=lambda: {"sent": 3, "failed": 1}),
    ) as send:
        response = client_for(guide).post(
            reverse("api:push:send-to-group"),
            {"title": "Info", "body": "Bus berangkat", "groupId": guide.group_id},
            format="json",
        )

    assert response.status_code == status.HTTP_200_OK
    assert response.data == {"message": "Notifications sent", "sent": 3, "failed": 1}
    assert send.call_args.args[0] == str(guide.group_id)


def test_send_to_group_needs_guide(client_for, member):
    response = client_for(member).post(
        reverse("api:push:send-to-group"),
        {"title": "Info", "body": "x", "groupId": member.group_id},
        format="json",
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
