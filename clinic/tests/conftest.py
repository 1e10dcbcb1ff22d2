import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    # throttle counters live in the cache; start every test with a clean slate
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_client(db):
    """APIClient authenticated as a fresh user with the given role."""
    from rest_framework.test import APIClient
    from clinic.models import User

    def _make(role):
        user = User.objects.create_user(username=f'{role}-{User.objects.count()}', password='P@ssw0rd-123',
                                        role=role)
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _make
