"""
Shared pytest fixtures.

Accounts for each role, API clients authenticated as them, and a clean
cache per test so throttle counters never leak between tests.
"""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from care.models import Doctor, User

PASSWORD = 'testpass123'


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Unauthenticated DRF API client."""
    return APIClient()


def _make_user(username, role, full_name, **extra):
    return User.objects.create_user(
        username=username, password=PASSWORD, full_name=full_name, role=role, **extra
    )


@pytest.fixture
def admin_user(db):
    return _make_user('admin', User.ROLE_ADMIN, 'Alice Admin')


@pytest.fixture
def doctor_user(db):
    return _make_user('drsmith', User.ROLE_DOCTOR, 'John Smith')


@pytest.fixture
def receptionist_user(db):
    return _make_user('desk', User.ROLE_RECEPTIONIST, 'Rita Desk')


@pytest.fixture
def doctor(doctor_user):
    return Doctor.objects.create(
        user=doctor_user,
        specialization='General Practice',
        practice_schedule='{"monday": "09:00-17:00"}',
    )


def _client_for(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def doctor_client(doctor_user):
    return _client_for(doctor_user)


@pytest.fixture
def receptionist_client(receptionist_user):
    return _client_for(receptionist_user)
