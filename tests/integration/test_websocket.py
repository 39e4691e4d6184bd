"""WebSocket endpoint tests through Starlette's TestClient."""

from __future__ import annotations

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from hazardboard.db.engine import get_db
from hazardboard.main import app
from hazardboard.models import Base
from hazardboard.services.auth import SESSION_COOKIE_NAME, create_session, register_account
from hazardboard.services.broadcaster import EventBroadcaster


@pytest.fixture
def live(tmp_path):
    """File-backed database shared by the client's event loops, plus a logged-in token."""
    # NullPool: each request opens its own connection on whichever loop serves it
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ws.db'}", poolclass=NullPool)
    test_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async def setup():
        async with test_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with test_factory() as db:
            account = await register_account(db, "alice", "pw1")
            return await create_session(account, db, max_age_days=7)

    token = asyncio.run(setup())

    async def override_get_db():
        async with test_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    saved_broadcaster = app.state.broadcaster
    app.state.broadcaster = EventBroadcaster()

    yield token

    app.dependency_overrides.clear()
    app.state.broadcaster = saved_broadcaster
    asyncio.run(test_engine.dispose())


SPILL = {"type": "Spill", "location": "Dock 3", "riskLevel": "low", "description": "Wet"}
FIRE = {"type": "Fire", "location": "Kitchen", "riskLevel": "high", "description": "Smoke"}


def _cookie(token):
    return {"cookie": f"{SESSION_COOKIE_NAME}={token}"}


def _post_hazard(ws, token, body):
    """POST a report on the socket's own event loop so the broadcast reaches it."""
    async def post():
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test", headers=_cookie(token),
        ) as client:
            return await client.post("/api/hazards", json=body)
    return ws.portal.call(post)


def test_missing_session_is_refused(live):
    client = TestClient(app)
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/api/ws"):
            pass
    assert exc.value.code == 4001
    assert app.state.broadcaster.connection_count == 0


def test_unknown_token_is_refused(live):
    client = TestClient(app)
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/api/ws", headers=_cookie("not-a-token")):
            pass
    assert exc.value.code == 4001


def test_viewer_is_registered_until_it_leaves(live):
    client = TestClient(app)
    with client.websocket_connect("/api/ws", headers=_cookie(live)):
        assert app.state.broadcaster.connection_count == 1
    assert app.state.broadcaster.connection_count == 0


def test_viewer_receives_report_created(live):
    client = TestClient(app)
    with client.websocket_connect("/api/ws", headers=_cookie(live)) as ws:
        r = _post_hazard(ws, live, SPILL)
        assert r.status_code == 201

        message = ws.receive_json()
        assert message["type"] == "report-created"
        assert message["payload"] == r.json()


def test_stray_frames_from_viewer_are_ignored(live):
    client = TestClient(app)
    with client.websocket_connect("/api/ws", headers=_cookie(live)) as ws:
        ws.send_bytes(b"\x00\x01")
        ws.send_text("hello")

        r = _post_hazard(ws, live, FIRE)
        assert r.status_code == 201
        assert ws.receive_json()["payload"]["id"] == r.json()["id"]
        assert app.state.broadcaster.connection_count == 1
