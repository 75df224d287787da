from .websocket.connection_manager import event_broadcaster, ConnectionManager

__all__ = ["event_broadcaster", "ConnectionManager"]
