from fastapi import WebSocket, WebSocketDisconnect
from typing import Callable, List, Optional
import asyncio
import json
from datetime import datetime

from reservation_ledger.logger_config import logger
from reservation_ledger.notifications.bus import EventBus
from reservation_ledger.notifications.events import LedgerEvent

class WebSocketManager:
    """Manager for WebSocket connections receiving ledger notifications"""

    def __init__(self):
        self.active_connections: List[WebSocket] = []
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    def attach(self, bus: EventBus):
        """Start forwarding bus events; must be called from the server's event loop"""
        self._loop = asyncio.get_running_loop()
        self._unsubscribe = bus.subscribe(self._on_event)

    def detach(self):
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        self._loop = None

    async def connect(self, websocket: WebSocket):
        """Accept new WebSocket connection"""
        await websocket.accept()
        self.active_connections.append(websocket)

    def disconnect(self, websocket: WebSocket):
        """Remove WebSocket connection"""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

    async def send_personal_message(self, websocket: WebSocket, message: dict):
        """Send message to specific WebSocket"""
        try:
            await websocket.send_text(json.dumps(message))
        except (WebSocketDisconnect, RuntimeError, OSError):
            self.disconnect(websocket)

    async def broadcast_to_all(self, message: dict):
        """Broadcast message to all connected clients"""
        if not self.active_connections:
            return

        message_text = json.dumps(message)
        disconnected = []

        for connection in list(self.active_connections):
            try:
                await connection.send_text(message_text)
            except (WebSocketDisconnect, RuntimeError, OSError):
                disconnected.append(connection)

        # Clean up disconnected clients
        for connection in disconnected:
            self.disconnect(connection)

    def _on_event(self, event: LedgerEvent):
        # Ledger mutations run in worker threads; hop onto the server loop
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        future = asyncio.run_coroutine_threadsafe(self.broadcast_to_all(event.to_message()), loop)
        future.add_done_callback(self._log_broadcast_failure)
        logger.debug(f"Queued {event.type} for {len(self.active_connections)} WebSocket client(s)")

    @staticmethod
    def _log_broadcast_failure(future):
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.opt(exception=error).error(f"WebSocket broadcast failed: {error!r}")

async def websocket_endpoint(websocket: WebSocket):
    """Ledger event stream; clients may send {"type": "ping"}"""
    ws_manager: WebSocketManager = websocket.app.state.ws_manager
    await ws_manager.connect(websocket)

    try:
        while True:
            data = await websocket.receive_text()

            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                await ws_manager.send_personal_message(websocket, {
                    "type": "error",
                    "detail": "invalid JSON",
                })
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await ws_manager.send_personal_message(websocket, {
                    "type": "pong",
                    "timestamp": datetime.now().isoformat()
                })

    except WebSocketDisconnect:
        ws_manager.disconnect(websocket)
