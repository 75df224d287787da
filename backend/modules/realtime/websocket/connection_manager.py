# backend/modules/realtime/websocket/connection_manager.py

from typing import Any, Dict, Optional, Set
from fastapi import WebSocket
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

# Endpoints a freshly connected client must fetch; broadcasts are not replayed
INITIAL_FETCH_ENDPOINTS = ["/api/rezerwacje", "/api/happy"]


class ConnectionManager:
    """Fan-out of change events to every connected client"""

    def __init__(self):
        self.active_connections: Set[WebSocket] = set()

    async def connect(self, websocket: WebSocket):
        """Accept new connection and tell it how to build its initial state"""
        await websocket.accept()
        self.active_connections.add(websocket)
        logger.info(f"WebSocket connected ({len(self.active_connections)} active)")

        await websocket.send_json(
            {
                "event": "connected",
                "data": {"refetch": INITIAL_FETCH_ENDPOINTS},
                "timestamp": datetime.utcnow().isoformat(),
            }
        )

    def disconnect(self, websocket: WebSocket):
        """Remove connection"""
        self.active_connections.discard(websocket)

    async def publish(self, event: str, data: Optional[Any] = None):
        """
        Broadcast ``event`` to all connections.

        Fire-and-forget: sockets that fail are dropped and nothing is raised
        to the publisher.
        """
        message: Dict[str, Any] = {"event": event, "data": data}
        disconnected = set()

        for websocket in list(self.active_connections):
            try:
                await websocket.send_json(message)
            except Exception as e:
                logger.warning(f"Dropping websocket after failed send of '{event}': {e}")
                disconnected.add(websocket)

        for websocket in disconnected:
            self.disconnect(websocket)

        logger.debug(
            f"Published '{event}' to {len(self.active_connections)} client(s)"
        )


event_broadcaster = ConnectionManager()
