"""
Ledger notifications

Committed state transitions are announced to external subscribers:

- events.py: TrainCreated / TicketBooked payloads
- bus.py: thread-safe in-process EventBus
- websocket.py: WebSocket fan-out of bus events to connected clients
"""

from .events import LedgerEvent, TrainCreated, TicketBooked
from .bus import EventBus
from .websocket import WebSocketManager, websocket_endpoint

__all__ = [
    "LedgerEvent",
    "TrainCreated",
    "TicketBooked",
    "EventBus",
    "WebSocketManager",
    "websocket_endpoint",
]
