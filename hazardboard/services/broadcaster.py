"""WebSocket fan-out of hazard lifecycle events to every connected viewer."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from hazardboard.models import HazardReport
from hazardboard.schemas.hazard import HazardRead
from hazardboard.schemas.ws_messages import EventKind, WSMessage

logger = logging.getLogger(__name__)


def snapshot(report: HazardReport) -> dict[str, Any]:
    """JSON-ready wire form of a report, as sent in event payloads."""
    return HazardRead.model_validate(report).model_dump(mode="json", by_alias=True)


class EventBroadcaster:
    """Set of live viewer sockets. Mutated only from the event loop."""

    def __init__(self):
        self._connections: set[WebSocket] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket):
        """Register, then complete the handshake. Events published in between are skipped."""
        self.register(websocket)
        try:
            await websocket.accept()
        except Exception:
            self.unregister(websocket)
            raise

    def register(self, websocket: WebSocket):
        self._connections.add(websocket)

    def unregister(self, websocket: WebSocket):
        self._connections.discard(websocket)

    async def publish(self, event_kind: EventKind | str, report_snapshot: dict[str, Any]) -> int:
        """Send one event to every open connection. Returns the delivered count.

        Delivery is best-effort: a failing socket is dropped from the set and
        the error never reaches the caller.
        """
        message = WSMessage(type=event_kind, payload=report_snapshot).model_dump_json()
        delivered = 0
        dead = []
        for ws in list(self._connections):
            if ws.client_state == WebSocketState.DISCONNECTED:
                dead.append(ws)
                continue
            if ws.client_state != WebSocketState.CONNECTED:
                continue
            try:
                await ws.send_text(message)
                delivered += 1
            except Exception as e:
                logger.debug("Dropping viewer connection after failed send: %s", e)
                dead.append(ws)
        for ws in dead:
            self.unregister(ws)
        return delivered
