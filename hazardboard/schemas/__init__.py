"""Pydantic request/response schemas."""

from hazardboard.schemas.hazard import (
    RiskLevel, HazardStatus, HazardCreate, HazardStatusUpdate, HazardRead,
)
from hazardboard.schemas.auth import RegisterRequest, LoginRequest, AccountRead
from hazardboard.schemas.ws_messages import EventKind, WSMessage

__all__ = [
    "RiskLevel", "HazardStatus", "HazardCreate", "HazardStatusUpdate", "HazardRead",
    "RegisterRequest", "LoginRequest", "AccountRead",
    "EventKind", "WSMessage",
]
