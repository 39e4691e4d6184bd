"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hazardboard.api.router import api_router
from hazardboard.config import get_settings
from hazardboard.db.engine import async_session_factory, create_tables, engine
from hazardboard.errors import HazardBoardError, StorageError
from hazardboard.services.auth import ensure_default_admin
from hazardboard.services.broadcaster import EventBroadcaster

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    await create_tables()

    if settings.seed_default_admin:
        async with async_session_factory() as db:
            await ensure_default_admin(
                db, settings.default_admin_username, settings.default_admin_password,
            )
    yield
    await engine.dispose()


app = FastAPI(
    title="HazardBoard",
    description="Workplace hazard reporting with administrator triage and live updates.",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.broadcaster = EventBroadcaster()

app.include_router(api_router)


@app.exception_handler(HazardBoardError)
async def hazardboard_error_handler(request: Request, exc: HazardBoardError):
    if isinstance(exc, StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request body", "code": "VALIDATION_ERROR", "errors": errors},
    )


@app.get("/health")
async def health():
    return {"status": "ok"}
