from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class RiskLevel(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class HazardStatus(str, Enum):
    open = "open"
    in_progress = "in progress"
    closed = "closed"

    @classmethod
    def parse(cls, value: str) -> "HazardStatus":
        """Accept 'in-progress' and 'in_progress' as spellings of 'in progress'."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", " ").replace("_", " ")
        return cls(normalized)


_camel = {"alias_generator": to_camel, "populate_by_name": True}


class HazardCreate(BaseModel):
    type: str = Field(min_length=1)
    location: str = Field(min_length=1)
    risk_level: RiskLevel
    description: str = Field(min_length=1)
    image_url: str | None = None

    model_config = {**_camel, "str_strip_whitespace": True}


class HazardStatusUpdate(BaseModel):
    status: HazardStatus
    remarks: str = ""

    model_config = _camel

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, v):
        if isinstance(v, str):
            try:
                return HazardStatus.parse(v)
            except ValueError:
                return v
        return v

    @field_validator("remarks", mode="before")
    @classmethod
    def _none_remarks(cls, v):
        return "" if v is None else v


class HazardRead(BaseModel):
    id: str
    user_id: str
    type: str
    location: str
    risk_level: RiskLevel
    description: str
    image_url: str | None = None
    status: HazardStatus
    remarks: str = ""
    created_at: datetime
    reporter: str | None = None

    model_config = {**_camel, "from_attributes": True}
