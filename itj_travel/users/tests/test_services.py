import math
from datetime import UTC
from datetime import datetime

import pytest

from itj_travel.users.models import User
from itj_travel.users.services import LocationFix
from itj_travel.users.services import coerce_coordinate
from itj_travel.users.services import record_location
from itj_travel.users.services import set_online
from itj_travel.users.services import to_timestamp_ms


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, 0.0),
        (-90, -90.0),
        (45.5, 45.5),
        (90.0001, None),
        ("45", None),
        (None, None),
        (True, None),
        (math.nan, None),
        (-math.inf, None),
    ],
)
def test_coerce_coordinate(value, expected):
    assert coerce_coordinate(value, limit=90) == expected


def test_fix_timestamp_is_epoch_milliseconds():
    recorded_at = datetime(2026, 10, 19, 8, 30, 15, 250000, tzinfo=UTC)
    fix = LocationFix(lat=21.4, lng=39.8, recorded_at=recorded_at)

    assert fix.timestamp_ms == 1792485015250
    assert fix.timestamp_ms == to_timestamp_ms(recorded_at)
    assert to_timestamp_ms(None) is None


@pytest.mark.django_db
def test_record_location_last_write_wins(member):
    record_location(member.pk, 21.4225, 39.8262)
    fix = record_location(member.pk, 21.3891, 39.8579)

    member.refresh_from_db()
    assert (float(member.last_latitude), float(member.last_longitude)) == (21.3891, 39.8579)
    assert member.last_location_at == fix.recorded_at
    assert member.is_online is True
    assert fix.as_payload()["timestamp"] == fix.timestamp_ms


@pytest.mark.django_db
def test_record_location_unknown_user():
    with pytest.raises(User.DoesNotExist):
        record_location(987654, 1.0, 1.0)


@pytest.mark.django_db
def test_set_online_toggles_flag(member):
    set_online(member, online=True)
    member.refresh_from_db()
    assert member.is_online is True

    set_online(member, online=False)
    member.refresh_from_db()
    assert member.is_online is False
