from unittest import mock

import pytest
from django.urls import reverse
from rest_framework import status

from itj_travel.notifications.models import Notification

pytestmark = pytest.mark.django_db


def test_guide_posts_notification_and_it_is_published(
    client_for,
    guide,
    group,
    django_capture_on_commit_callbacks,
):
    with (
        mock.patch("itj_travel.notifications.signals.publish_notification_created") as publish,
        django_capture_on_commit_callbacks(execute=True),
    ):
        response = client_for(guide).post(
            reverse("api:notifications-list"),
            {"title": "Kumpul", "content": "Lobby hotel jam 07.00", "type": "warning"},
            format="json",
        )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.data["type"] == "warning"
    notification = Notification.objects.get(pk=response.data["id"])
    assert notification.group == group
    publish.assert_called_once_with(notification)


def test_invalid_type_is_rejected_without_publishing(
    client_for,
    guide,
    django_capture_on_commit_callbacks,
):
    with (
        mock.patch("itj_travel.notifications.signals.publish_notification_created") as publish,
        django_capture_on_commit_callbacks(execute=True),
    ):
        response = client_for(guide).post(
            reverse("api:notifications-list"),
            {"title": "Kumpul", "content": "x", "type": "urgent"},
            format="json",
        )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    publish.assert_not_called()


def test_member_cannot_post(client_for, member):
    response = client_for(member).post(
        reverse("api:notifications-list"),
        {"title": "t", "content": "c"},
        format="json",
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_member_lists_group_notifications_newest_first(client_for, member, group, other_group):
    with mock.patch("itj_travel.notifications.signals.publish_notification_created"):
        first = Notification.objects.create(group=group, title="Satu", content="1")
        second = Notification.objects.create(group=group, title="Dua", content="2")
        Notification.objects.create(group=other_group, title="Lain", content="3")

    response = client_for(member).get(reverse("api:notifications-list"))

    assert [row["id"] for row in response.data] == [str(second.pk), str(first.pk)]
    assert response.data[0]["type"] == "info"
    assert isinstance(response.data[0]["timestamp"], int)
