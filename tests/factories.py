"""Small builders for domain objects shared by the app test suites."""

from __future__ import annotations

import itertools
from datetime import date

from itj_travel.travel_groups.models import TravelGroup
from itj_travel.users.models import User

DEFAULT_PASSWORD = "Rahasia!123"  # noqa: S105 - test credentials only

_sequence = itertools.count(1)


def create_group(**kwargs) -> TravelGroup:
    n = next(_sequence)
    values = {
        "name": f"Rombongan {n}",
        "destination": "Makkah",
        "join_code": f"GRP{n:04d}",
        "departure_date": date(2026, 11, 1),
        "return_date": date(2026, 11, 12),
        "departure_airport": "CGK",
    }
    values.update(kwargs)
    return TravelGroup.objects.create(**values)


def create_member(group: TravelGroup | None = None, **kwargs) -> User:
    n = next(_sequence)
    values = {
        "username": f"member{n}",
        "name": f"Member {n}",
        "phone": f"0812000{n:05d}",
        "role": User.Role.JAMAAH,
        "group": group,
    }
    values.update(kwargs)
    password = values.pop("password", DEFAULT_PASSWORD)
    return User.objects.create_user(password=password, **values)
