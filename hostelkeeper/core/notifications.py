"""
Real-time notification channel

Fire-and-forget fan-out of status changes to connected WebSocket clients.
Services publish from synchronous code; delivery happens on the event loop
the hub was bound to at startup.
"""

import asyncio
import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Set

from fastapi import WebSocket

from .logging import get_logger

logger = get_logger(__name__)


class NotificationEvent(str, Enum):
    """Events pushed to connected clients"""
    LEAVE_UPDATED = "leave-updated"
    COMPLAINT_UPDATED = "complaint-updated"


class Notifier(Protocol):
    def publish(self, event: str, payload: Dict[str, Any]) -> None:
        ...


class NullNotifier:
    """Notifier that discards every event"""

    def publish(self, event: str, payload: Dict[str, Any]) -> None:
        logger.debug(f"Dropping {event} notification, no channel configured")


def build_status_payload(
    entity_id: str,
    student_id: str,
    status: str,
    remarks: Optional[str] = None,
    include_remarks: bool = False,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": entity_id,
        "student_id": student_id,
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if include_remarks:
        payload["remarks"] = remarks
    return payload


class NotificationHub:
    """Registry of WebSocket connections with thread-safe publishing"""

    def __init__(self):
        self._connections: Set[WebSocket] = set()
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def bind_loop(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Remember the loop that owns the connections"""
        self._loop = loop or asyncio.get_running_loop()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.add(websocket)
        if self._loop is None:
            self.bind_loop()
        logger.info(f"Notification client connected ({self.connection_count} active)")

    def disconnect(self, websocket: WebSocket) -> None:
        self._connections.discard(websocket)
        logger.info(f"Notification client disconnected ({self.connection_count} active)")

    async def broadcast(self, event: str, payload: Dict[str, Any]) -> None:
        message = json.dumps({"event": event, "data": payload}, default=str)
        dead = []
        for websocket in list(self._connections):
            try:
                await websocket.send_text(message)
            except Exception as e:
                logger.warning(f"Dropping notification client: {e}")
                dead.append(websocket)
        for websocket in dead:
            self._connections.discard(websocket)

    def publish(self, event: str, payload: Dict[str, Any]) -> None:
        """Schedule a broadcast; never raises and never waits for delivery"""
        if not self._connections or self._loop is None or self._loop.is_closed():
            logger.debug(f"No listeners for {event}")
            return

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        try:
            if running is self._loop:
                self._loop.create_task(self.broadcast(event, payload))
            else:
                asyncio.run_coroutine_threadsafe(self.broadcast(event, payload), self._loop)
        except RuntimeError as e:
            logger.warning(f"Could not schedule {event} notification: {e}")


hub = NotificationHub()
