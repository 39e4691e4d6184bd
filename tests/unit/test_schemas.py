import pytest
from pydantic import ValidationError

from hazardboard.schemas import (
    HazardCreate,
    HazardStatus,
    HazardStatusUpdate,
    RiskLevel,
    WSMessage,
)


def test_hazard_create_accepts_camel_case():
    body = HazardCreate.model_validate({
        "type": "Spill", "location": "Dock 3", "riskLevel": "medium",
        "description": "Wet floor", "imageUrl": "https://example.com/a.jpg",
    })
    assert body.risk_level is RiskLevel.medium
    assert body.image_url == "https://example.com/a.jpg"


def test_hazard_create_rejects_unknown_risk_level():
    with pytest.raises(ValidationError):
        HazardCreate(type="Spill", location="Dock 3", risk_level="extreme", description="x")


def test_hazard_create_rejects_blank_fields():
    with pytest.raises(ValidationError):
        HazardCreate(type="   ", location="Dock 3", risk_level="low", description="x")


@pytest.mark.parametrize("raw", ["in progress", "in-progress", "in_progress", "In Progress"])
def test_status_update_normalizes_in_progress(raw):
    update = HazardStatusUpdate(status=raw, remarks="Crew dispatched")
    assert update.status is HazardStatus.in_progress


def test_status_update_rejects_unknown_status():
    with pytest.raises(ValidationError):
        HazardStatusUpdate(status="archived")


def test_status_update_remarks_default_empty():
    assert HazardStatusUpdate(status="closed").remarks == ""
    assert HazardStatusUpdate(status="closed", remarks=None).remarks == ""


def test_ws_message_serializes_event_kind():
    msg = WSMessage(type="status-changed", payload={"id": "abc"})
    assert msg.model_dump(mode="json") == {"type": "status-changed", "payload": {"id": "abc"}}
