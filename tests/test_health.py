from unittest import mock

import pytest


@pytest.mark.django_db
def test_health_ok_when_db_and_redis_answer(client):
    with mock.patch("config.health.redis.Redis.from_url") as from_url:
        from_url.return_value.ping.return_value = True
        response = client.get("/health/")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["components"] == {"db": {"ok": True}, "redis": {"ok": True}}


@pytest.mark.django_db
def test_health_degraded_without_broker(client):
    with mock.patch("config.health.redis.Redis.from_url") as from_url:
        from_url.return_value.ping.side_effect = ConnectionError("refused")
        response = client.get("/api/health/")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "degraded"
    assert body["components"]["redis"] == {"ok": False, "error": "refused"}
