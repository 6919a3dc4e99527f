from __future__ import annotations

import logging
from typing import Dict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Websocket subscribers grouped by competition id."""

    def __init__(self) -> None:
        self._channels: Dict[str, Set[WebSocket]] = {}

    async def connect(self, competition_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self._channels.setdefault(competition_id, set()).add(websocket)
        logger.debug(
            "Live client joined competition %s (%d watching)",
            competition_id, self.subscriber_count(competition_id),
        )

    def disconnect(self, competition_id: str, websocket: WebSocket) -> None:
        subscribers = self._channels.get(competition_id)
        if not subscribers:
            return
        subscribers.discard(websocket)
        if not subscribers:
            del self._channels[competition_id]

    async def broadcast(self, competition_id: str, message: Dict[str, object]) -> int:
        """Send to every subscriber; failed sockets are dropped. Returns deliveries."""
        delivered = 0
        failed: Set[WebSocket] = set()

        for websocket in list(self._channels.get(competition_id, ())):
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception:
                logger.warning("Dropping live client for competition %s", competition_id)
                failed.add(websocket)

        for websocket in failed:
            self.disconnect(competition_id, websocket)

        return delivered

    def subscriber_count(self, competition_id: str) -> int:
        return len(self._channels.get(competition_id, ()))


manager = ConnectionManager()
