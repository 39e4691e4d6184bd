from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, WebSocket
from sqlalchemy.ext.asyncio import AsyncSession

from hazardboard.db.engine import get_db
from hazardboard.services.auth import SESSION_COOKIE_NAME, validate_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


@router.websocket("/api/ws")
async def websocket_endpoint(websocket: WebSocket, db: AsyncSession = Depends(get_db)):
    token = websocket.cookies.get(SESSION_COOKIE_NAME, "")
    account = await validate_session(token, db) if token else None
    # Release the connection now, the socket may stay open for hours
    await db.close()
    if not account:
        await websocket.close(code=4001, reason="Unauthorized")
        return

    broadcaster = websocket.app.state.broadcaster
    await broadcaster.connect(websocket)
    logger.info("Viewer %s connected (%d open)", account.username, broadcaster.connection_count)
    try:
        # Nothing is expected from viewers; discard text and binary frames until close
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        broadcaster.unregister(websocket)
        logger.info("Viewer %s disconnected", account.username)
