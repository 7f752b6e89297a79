from datetime import date

import pytest
from django.urls import reverse
from rest_framework import status

from itj_travel.itinerary.models import ItineraryItem

pytestmark = pytest.mark.django_db


def add_item(group, day, time, activity="Tawaf"):
    return ItineraryItem.objects.create(
        group=group,
        day=day,
        date=date(2026, 11, day),
        time=time,
        activity=activity,
        location="Masjidil Haram",
    )


def test_member_lists_own_group_in_day_order(client_for, member, group, other_group):
    add_item(group, 2, "08:00", "Sai")
    add_item(group, 1, "14:00", "Tawaf")
    add_item(group, 1, "05:00", "Subuh")
    add_item(other_group, 1, "07:00", "Elsewhere")

    response = client_for(member).get(reverse("api:itinerary-list"))

    assert response.status_code == status.HTTP_200_OK
    assert [row["activity"] for row in response.data] == ["Subuh", "Tawaf", "Sai"]


def test_filter_by_day(client_for, member, group):
    add_item(group, 1, "05:00")
    add_item(group, 3, "09:00", "Ziarah")

    response = client_for(member).get(reverse("api:itinerary-day", args=[3]))

    assert [row["activity"] for row in response.data] == ["Ziarah"]


def test_guide_creates_item_in_own_group(client_for, guide, group):
    response = client_for(guide).post(
        reverse("api:itinerary-list"),
        {
            "day": 1,
            "date": "2026-11-01",
            "time": "20:00",
            "activity": "Briefing",
            "location": "Hotel",
        },
        format="json",
    )

    assert response.status_code == status.HTTP_201_CREATED
    item = ItineraryItem.objects.get(pk=response.data["id"])
    assert item.group == group
    assert item.icon == "calendar"


def test_member_cannot_create(client_for, member):
    response = client_for(member).post(
        reverse("api:itinerary-list"),
        {"day": 1, "date": "2026-11-01", "time": "20:00", "activity": "x", "location": "y"},
        format="json",
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_guide_cannot_delete_other_groups_item(client_for, guide, other_group):
    item = add_item(other_group, 1, "05:00")

    response = client_for(guide).delete(reverse("api:itinerary-detail", args=[item.pk]))

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert ItineraryItem.objects.filter(pk=item.pk).exists()


def test_guide_deletes_item(client_for, guide, group):
    item = add_item(group, 1, "05:00")

    response = client_for(guide).delete(reverse("api:itinerary-detail", args=[item.pk]))

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert not ItineraryItem.objects.filter(pk=item.pk).exists()
