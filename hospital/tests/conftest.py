import pytest
from django.core.cache import cache

from hospital.models import User
from hospital.services.seed import seed_sample_data
from hospital.storage import DatabaseStorage, MemStorage, set_storage


@pytest.fixture(autouse=True)
def fresh_state():
    """Empty cache and a new database-backed storage for every test."""
    cache.clear()
    set_storage(DatabaseStorage())
    yield
    set_storage(None)
    cache.clear()


@pytest.fixture
def seeded(db):
    storage = DatabaseStorage()
    seed_sample_data(storage)
    set_storage(storage)
    return storage


@pytest.fixture
def mem_storage():
    storage = MemStorage(seed=True)
    set_storage(storage)
    return storage


@pytest.fixture(params=['database', 'memory'])
def any_storage(request):
    """A seeded storage of each backend, installed process-wide."""
    if request.param == 'database':
        request.getfixturevalue('db')
        storage = DatabaseStorage()
        seed_sample_data(storage)
    else:
        storage = MemStorage(seed=True)
    set_storage(storage)
    return storage


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username='admin', password='P@ssw0rd1', role='admin', first_name='Admin')


@pytest.fixture
def api(admin_user):
    from rest_framework.test import APIClient
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client
