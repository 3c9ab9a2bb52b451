import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.core.management import call_command

from hospital.realtime.consumers import UpdatesConsumer
from hospital.services import dashboard
from hospital.services.realtime import UPDATES_GROUP, publish_bed_status


@pytest.mark.django_db
def test_updates_consumer_relays_bed_status():
    async def scenario():
        communicator = WebsocketCommunicator(UpdatesConsumer.as_asgi(), '/ws/updates/')
        connected, _ = await communicator.connect()
        assert connected
        assert (await communicator.receive_json_from())['type'] == 'welcome'
        await get_channel_layer().group_send(UPDATES_GROUP, {
            'type': 'bed.status', 'bedId': 9, 'roomId': 3, 'bedNumber': 'V201-1', 'status': 'occupied',
        })
        message = await communicator.receive_json_from()
        await communicator.disconnect()
        return message

    message = async_to_sync(scenario)()
    assert message['bedNumber'] == 'V201-1'
    assert message['status'] == 'occupied'


def test_publish_bed_status_sends_to_updates_group(monkeypatch):
    sent = []

    class Layer:
        async def group_send(self, group, event):
            sent.append((group, event))

    monkeypatch.setattr('hospital.services.realtime.get_channel_layer', lambda: Layer())
    publish_bed_status({'id': 4, 'roomId': 2, 'bedNumber': 'R102-4', 'status': 'available'})
    assert sent == [('updates', {'type': 'bed.status', 'bedId': 4, 'roomId': 2,
                                 'bedNumber': 'R102-4', 'status': 'available'})]


@pytest.mark.django_db
def test_populate_and_refresh_commands(monkeypatch):
    from hospital.storage import DatabaseStorage, set_storage

    call_command('populate_data')
    call_command('populate_data')
    storage = DatabaseStorage()
    assert storage.count('department') == 4
    assert storage.count('bed') == 10

    set_storage(storage)
    sent = []

    class Layer:
        async def group_send(self, group, event):
            sent.append((group, event))

    monkeypatch.setattr('hospital.services.realtime.get_channel_layer', lambda: Layer())
    call_command('refresh_caches')
    assert [(group, event['type']) for group, event in sent] == [(UPDATES_GROUP, 'broadcast.refresh')]
    assert sent[0][1]['keys'] == list(dashboard.CACHE_KEYS.values())
    from django.core.cache import cache
    assert cache.get(dashboard.CACHE_KEYS['stats'])['totalPatients'] == 5


@pytest.mark.django_db
def test_ensure_test_users_command():
    from hospital.models import User
    call_command('ensure_test_users', password='s3cret-pass')
    call_command('ensure_test_users', password='s3cret-pass')
    assert User.objects.filter(role='admin').count() == 1
    assert User.objects.get(username='cashier1').check_password('s3cret-pass')
