import json

from channels.generic.websocket import AsyncWebsocketConsumer

from hospital.services.realtime import UPDATES_GROUP


class UpdatesConsumer(AsyncWebsocketConsumer):
    """Pushes bed status changes and dashboard refresh hints to clients."""

    async def connect(self):
        await self.channel_layer.group_add(UPDATES_GROUP, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(UPDATES_GROUP, self.channel_name)

    async def bed_status(self, event):
        # event: {"type": "bed.status", "bedId": int, "roomId": int, "bedNumber": str, "status": str}
        await self.send(json.dumps(event))

    async def broadcast_refresh(self, event):
        # event: {"type": "broadcast.refresh", "ts": "...", "keys": [...]}
        await self.send(json.dumps(event))
