"""
WebSocket route for admin clients following reservations and the happy bar.

Message types (server -> client):
- connected: greeting with the endpoints to fetch for initial state
- new-reservation: full reservation record
- reservations-updated: no payload, clients re-fetch the list
- happy-updated: the new announcement text
"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
import logging

from ..websocket.connection_manager import event_broadcaster

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ws", tags=["Realtime"])


@router.websocket("/events")
async def events_websocket(websocket: WebSocket):
    await event_broadcaster.connect(websocket)
    try:
        while True:
            # Clients have nothing to say; keep reading to notice the close
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        event_broadcaster.disconnect(websocket)
