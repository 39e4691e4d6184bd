from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class EventKind(str, Enum):
    report_created = "report-created"
    status_changed = "status-changed"


class WSMessage(BaseModel):
    type: EventKind
    payload: dict[str, Any] = {}
