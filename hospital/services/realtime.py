"""Push notifications to WebSocket clients subscribed to ``ws/updates/``."""
from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

UPDATES_GROUP = 'updates'


def publish(event_type: str, **payload) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    async_to_sync(channel_layer.group_send)(UPDATES_GROUP, {'type': event_type, **payload})


def publish_bed_status(bed: dict) -> None:
    publish('bed.status', bedId=bed['id'], roomId=bed['roomId'], bedNumber=bed['bedNumber'], status=bed['status'])


def broadcast_refresh(ts: str, keys: list[str]) -> None:
    publish('broadcast.refresh', ts=ts, keys=keys)
