"""FastAPI dependency providers for auth, settings, the registry and the broadcaster."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hazardboard.config import Settings, get_settings
from hazardboard.db.engine import get_db
from hazardboard.services.auth import AuthContext, get_current_user
from hazardboard.services.broadcaster import EventBroadcaster
from hazardboard.services.registry import HazardRegistry


@lru_cache
def get_settings_dep() -> Settings:
    return get_settings()


async def require_auth(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> AuthContext:
    """Require a valid authenticated session. Returns AuthContext."""
    return await get_current_user(request, db)


def get_registry(db: AsyncSession = Depends(get_db)) -> HazardRegistry:
    return HazardRegistry(db)


def get_broadcaster(request: Request) -> EventBroadcaster:
    """The application's broadcaster, created once in ``hazardboard.main``."""
    return request.app.state.broadcaster
