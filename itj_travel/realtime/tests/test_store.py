import asyncio

import pytest
from asgiref.sync import async_to_sync
from django.db import OperationalError

from itj_travel.panic import services as panic_services
from itj_travel.panic.models import PanicAlert
from itj_travel.realtime import store as store_module
from itj_travel.realtime.connections import Connection
from itj_travel.realtime.exceptions import AlertAlreadyResolved
from itj_travel.realtime.exceptions import AlertNotFound
from itj_travel.realtime.exceptions import ResolveNotPermitted
from itj_travel.realtime.exceptions import StoreUnavailable
from itj_travel.realtime.exceptions import UnknownSubject
from itj_travel.realtime.payloads import NEW_PANIC_ALERT
from itj_travel.realtime.registry import PresenceRoomRegistry
from itj_travel.realtime.router import RealtimeEventRouter
from itj_travel.realtime.store import DurableStateStore

# The store hops into worker threads, so the test database must be committed.
pytestmark = pytest.mark.django_db(transaction=True)


@pytest.fixture
def store():
    return DurableStateStore()


def test_record_location_overwrites_last_position(store, member):
    async_to_sync(store.record_location)(str(member.pk), -6.2, 106.8)
    fix = async_to_sync(store.record_location)(str(member.pk), -6.3, 106.9)

    member.refresh_from_db()
    assert float(member.last_latitude) == pytest.approx(-6.3)
    assert float(member.last_longitude) == pytest.approx(106.9)
    assert member.is_online is True
    assert member.locations.count() == 2
    assert fix.lat == pytest.approx(-6.3)


def test_record_location_for_deleted_user(store):
    with pytest.raises(UnknownSubject):
        async_to_sync(store.record_location)("999999", 1.0, 2.0)


def test_raise_panic_uses_default_message_and_sets_flag(store, member, settings):
    record = async_to_sync(store.raise_panic_alert)(str(member.pk))

    member.refresh_from_db()
    assert record.created is True
    assert record.payload["message"] == settings.DEFAULT_PANIC_MESSAGE
    assert record.payload["userId"] == str(member.pk)
    assert record.payload["userName"] == "Aisyah"
    assert record.payload["location"] == {"lat": 0.0, "lng": 0.0}
    assert member.is_panic is True


def test_raise_panic_keeps_sender_coordinates(store, member):
    record = async_to_sync(store.raise_panic_alert)(
        str(member.pk),
        message="Tersesat di Mina",
        latitude=21.4133,
        longitude="39.8933",
    )

    assert record.message == "Tersesat di Mina"
    assert record.payload["location"] == {"lat": 21.4133, "lng": 39.8933}


def test_known_alert_id_is_replayed_not_duplicated(store, member):
    first = async_to_sync(store.raise_panic_alert)(str(member.pk))

    again = async_to_sync(store.raise_panic_alert)(str(member.pk), alert_id=first.payload["id"])

    assert again.created is False
    assert again.payload["id"] == first.payload["id"]
    assert PanicAlert.objects.count() == 1


def test_replay_of_resolved_alert_is_refused(store, member):
    alert_id = async_to_sync(store.raise_panic_alert)(str(member.pk)).payload["id"]
    async_to_sync(store.resolve_panic_alert)(alert_id, str(member.pk), "jamaah")

    with pytest.raises(AlertAlreadyResolved):
        async_to_sync(store.raise_panic_alert)(str(member.pk), alert_id=alert_id)

    member.refresh_from_db()
    assert PanicAlert.objects.count() == 1
    assert member.is_panic is False


def test_router_does_not_rebroadcast_alert_resolved_over_rest(store, member, peer):
    registry = PresenceRoomRegistry()
    registry.attach("s-member", member.group_id, str(member.pk))
    registry.attach("s-peer", peer.group_id, str(peer.pk))
    sent = []

    async def emit(event, payload, sid):
        sent.append((sid, event, payload))

    router = RealtimeEventRouter(registry, store, emit)
    sender = Connection("s-member", str(member.pk), str(member.group_id), "jamaah")
    alert = panic_services.raise_panic_alert(member.pk)
    panic_services.resolve_panic_alert(alert.pk, resolver_id=member.pk, role="jamaah")

    ack = async_to_sync(router.handle_panic_alert)(sender, {"alert": {"id": str(alert.pk)}})

    assert ack == {"ok": False, "error": "already_resolved"}
    assert [e for _, e, _ in sent if e == NEW_PANIC_ALERT] == []
    assert PanicAlert.objects.count() == 1


def test_foreign_alert_id_creates_a_new_alert(store, member, peer):
    theirs = async_to_sync(store.raise_panic_alert)(str(peer.pk))

    mine = async_to_sync(store.raise_panic_alert)(str(member.pk), alert_id=theirs.payload["id"])

    assert mine.created is True
    assert mine.payload["id"] != theirs.payload["id"]


def test_owner_resolves_and_flag_clears(store, member):
    alert_id = async_to_sync(store.raise_panic_alert)(str(member.pk)).payload["id"]

    resolved = async_to_sync(store.resolve_panic_alert)(alert_id, str(member.pk), "jamaah")

    member.refresh_from_db()
    assert resolved.newly_resolved is True
    assert resolved.owner_id == str(member.pk)
    assert resolved.owner_group_id == str(member.group_id)
    assert member.is_panic is False


def test_flag_stays_while_another_alert_is_open(store, member):
    first = async_to_sync(store.raise_panic_alert)(str(member.pk)).payload["id"]
    async_to_sync(store.raise_panic_alert)(str(member.pk))

    async_to_sync(store.resolve_panic_alert)(first, str(member.pk), "jamaah")

    member.refresh_from_db()
    assert member.is_panic is True


def test_second_resolve_is_a_no_op(store, member, guide):
    alert_id = async_to_sync(store.raise_panic_alert)(str(member.pk)).payload["id"]
    async_to_sync(store.resolve_panic_alert)(alert_id, str(guide.pk), "pembimbing")

    again = async_to_sync(store.resolve_panic_alert)(alert_id, str(member.pk), "jamaah")

    alert = PanicAlert.objects.get(pk=alert_id)
    assert again.newly_resolved is False
    assert alert.resolved_by_id == guide.pk


def test_plain_member_cannot_resolve_someone_else(store, member, peer):
    alert_id = async_to_sync(store.raise_panic_alert)(str(member.pk)).payload["id"]

    with pytest.raises(ResolveNotPermitted):
        async_to_sync(store.resolve_panic_alert)(alert_id, str(peer.pk), "jamaah")

    assert PanicAlert.objects.get(pk=alert_id).is_resolved is False


def test_resolve_unknown_alert(store, member):
    with pytest.raises(AlertNotFound):
        async_to_sync(store.resolve_panic_alert)(424242, str(member.pk), "admin")


def test_slow_store_call_maps_to_unavailable(monkeypatch, member):
    async def never_finishes(*args):
        await asyncio.sleep(5)

    monkeypatch.setattr(store_module, "database_sync_to_async", lambda func: never_finishes)
    store = DurableStateStore(timeout=0.01)

    with pytest.raises(StoreUnavailable):
        async_to_sync(store.record_location)(str(member.pk), 1.0, 2.0)


def test_database_error_maps_to_unavailable(monkeypatch, member):
    async def broken(*args):
        msg = "database is locked"
        raise OperationalError(msg)

    monkeypatch.setattr(store_module, "database_sync_to_async", lambda func: broken)

    with pytest.raises(StoreUnavailable):
        async_to_sync(DurableStateStore().raise_panic_alert)(str(member.pk))


def test_timeout_defaults_to_setting(settings):
    settings.REALTIME_STORE_TIMEOUT = 3.5
    assert DurableStateStore().timeout == 3.5
    assert DurableStateStore(timeout=1).timeout == 1
