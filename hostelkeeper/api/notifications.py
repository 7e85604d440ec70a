"""
WebSocket endpoint for status change notifications.

Clients only listen; anything they send is ignored.
"""
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from hostelkeeper.core.notifications import hub

router = APIRouter(tags=["Notifications"])


@router.websocket("/ws/notifications")
async def notifications(websocket: WebSocket):
    await hub.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(websocket)
