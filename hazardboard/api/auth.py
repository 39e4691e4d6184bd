"""Auth API: register, login, logout, current identity."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hazardboard.config import Settings
from hazardboard.db.engine import get_db
from hazardboard.dependencies import get_settings_dep, require_auth
from hazardboard.schemas import AccountRead, LoginRequest, RegisterRequest
from hazardboard.services.auth import (
    AuthContext, SESSION_COOKIE_NAME,
    authenticate, create_session, register_account, remove_session,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register")
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    await register_account(db, body.username, body.password)
    return {"success": True}


@router.post("/login")
async def login(
    body: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    account = await authenticate(db, body.username, body.password)
    if not account:
        return JSONResponse(status_code=401, content={"detail": "Invalid credentials", "code": "AUTH_FAILED"})

    ip = request.client.host if request.client else ""
    token = await create_session(
        account, db, ip_address=ip, max_age_days=settings.session_max_age_days,
    )

    response = JSONResponse(content=AccountRead.model_validate(account).model_dump(mode="json"))
    response.set_cookie(
        SESSION_COOKIE_NAME, token,
        httponly=True, samesite="lax", secure=settings.cookie_secure,
        max_age=86400 * settings.session_max_age_days,
    )
    return response


@router.post("/logout")
async def logout(
    request: Request,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token:
        await remove_session(token, db)
    response = JSONResponse(content={"success": True})
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response


@router.get("/me", response_model=AccountRead)
async def get_me(auth: AuthContext = Depends(require_auth)):
    return AccountRead(id=auth.account_id, username=auth.username, role=auth.role)
