"""Central router that includes all sub-routers."""

from fastapi import APIRouter

from hazardboard.api.auth import router as auth_router
from hazardboard.api.hazards import router as hazards_router
from hazardboard.api.websocket import router as websocket_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(hazards_router)
api_router.include_router(websocket_router)
