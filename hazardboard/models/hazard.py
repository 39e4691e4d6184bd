"""HazardReport model: one submitted safety observation."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from hazardboard.models.base import Base, ULIDPrimaryKey, utcnow


class HazardReport(Base, ULIDPrimaryKey):
    __tablename__ = "hazard_reports"

    user_id: Mapped[str] = mapped_column(String(26), ForeignKey("accounts.id"), index=True)
    type: Mapped[str] = mapped_column(Text)
    location: Mapped[str] = mapped_column(Text)
    risk_level: Mapped[str] = mapped_column(String(10))  # low | medium | high
    description: Mapped[str] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="open")  # open | in progress | closed
    remarks: Mapped[str] = mapped_column(Text, default="")
    # Submission time; newest-first listings order on it
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)

    # Owner's username, filled in for administrator listings only.
    reporter = None
