import pytest
from rest_framework.test import APIClient

from tests.factories import create_group
from tests.factories import create_member


@pytest.fixture
def group(db):
    return create_group()


@pytest.fixture
def other_group(db):
    return create_group(name="Rombongan Lain")


@pytest.fixture
def member(group):
    return create_member(group, name="Aisyah")


@pytest.fixture
def peer(group):
    return create_member(group, name="Bilal")


@pytest.fixture
def guide(group):
    return create_member(group, name="Ustadz Hasan", role="pembimbing")


@pytest.fixture
def admin_user(group):
    return create_member(group, name="Admin", role="admin")


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for(api_client):
    def _login(user):
        api_client.force_authenticate(user=user)
        return api_client

    return _login
