"""Websocket feed of score changes for one competition."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from realtime import manager

router = APIRouter()


@router.websocket("/{competition_id}/live")
async def competition_live(websocket: WebSocket, competition_id: str) -> None:
    await manager.connect(competition_id, websocket)
    try:
        while True:
            # Clients only listen; anything they send is a keep-alive.
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(competition_id, websocket)
