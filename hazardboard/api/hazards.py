"""Hazard API: submit, list and triage hazard reports."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hazardboard.dependencies import get_broadcaster, get_registry, require_auth
from hazardboard.schemas import EventKind, HazardCreate, HazardRead, HazardStatusUpdate
from hazardboard.services.auth import AuthContext
from hazardboard.services.broadcaster import EventBroadcaster, snapshot
from hazardboard.services.registry import HazardRegistry

router = APIRouter(prefix="/api/hazards", tags=["hazards"])


@router.post("", response_model=HazardRead, status_code=201)
async def create_hazard(
    body: HazardCreate,
    auth: AuthContext = Depends(require_auth),
    registry: HazardRegistry = Depends(get_registry),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
):
    report = await registry.create_report(
        auth.account_id, body.type, body.location, body.risk_level,
        body.description, image_ref=body.image_url,
    )
    await broadcaster.publish(EventKind.report_created, snapshot(report))
    return report


@router.get("", response_model=list[HazardRead])
async def list_hazards(
    auth: AuthContext = Depends(require_auth),
    registry: HazardRegistry = Depends(get_registry),
):
    return await registry.list_reports(auth)


@router.patch("/{hazard_id}", response_model=HazardRead)
async def update_hazard_status(
    hazard_id: str,
    body: HazardStatusUpdate,
    auth: AuthContext = Depends(require_auth),
    registry: HazardRegistry = Depends(get_registry),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
):
    report = await registry.update_status(hazard_id, body.status, body.remarks, auth)
    await broadcaster.publish(EventKind.status_changed, snapshot(report))
    return report
