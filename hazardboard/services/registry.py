"""Hazard registry: creates reports, lists them per viewer, applies status changes.

The registry is the only writer of hazard status. Every mutation is committed
before the method returns, so callers may broadcast the returned record
knowing a subsequent fetch will agree with it.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hazardboard.db import crud
from hazardboard.errors import AuthorizationError, NotFoundError, StorageError, ValidationError
from hazardboard.models import HazardReport
from hazardboard.schemas.hazard import HazardStatus, RiskLevel
from hazardboard.services.auth import AuthContext

logger = logging.getLogger(__name__)


def _require_text(name: str, value: str | None) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{name} is required")
    return value


class HazardRegistry:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_report(
        self,
        owner_id: str,
        type: str,
        location: str,
        risk_level: RiskLevel | str,
        description: str,
        image_ref: str | None = None,
    ) -> HazardReport:
        type = _require_text("type", type)
        location = _require_text("location", location)
        description = _require_text("description", description)
        try:
            risk = RiskLevel(risk_level)
        except ValueError:
            raise ValidationError("riskLevel must be one of low, medium, high")

        if await crud.get_account(self.db, owner_id) is None:
            raise NotFoundError(f"Account {owner_id} not found")

        try:
            report = await crud.create_hazard(
                self.db, owner_id, type, location, risk.value, description,
                image_url=image_ref or None,
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Failed to store hazard report for %s", owner_id)
            raise StorageError(str(e)) from e

        logger.info("Hazard report %s created by %s (%s risk)", report.id, owner_id, risk.value)
        return report

    async def list_reports(self, viewer: AuthContext) -> list[HazardReport]:
        """Administrators get every report with ``reporter`` set; employees only their own."""
        if viewer.is_admin:
            rows = await crud.list_hazards_with_reporter(self.db)
            reports = []
            for report, username in rows:
                report.reporter = username
                reports.append(report)
            return reports
        return await crud.list_hazards_for_user(self.db, viewer.account_id)

    async def update_status(
        self,
        report_id: str,
        new_status: HazardStatus | str,
        remarks: str | None,
        actor: AuthContext,
    ) -> HazardReport:
        if not actor.is_admin:
            raise AuthorizationError("Only administrators can change hazard status")

        report = await crud.get_hazard(self.db, report_id)
        if report is None:
            raise NotFoundError(f"Hazard report {report_id} not found")

        try:
            status = HazardStatus.parse(new_status)
        except ValueError:
            raise ValidationError("status must be one of open, in progress, closed")

        previous = report.status
        try:
            report = await crud.update_hazard(
                self.db, report, status=status.value, remarks=remarks or "",
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Failed to update hazard report %s", report_id)
            raise StorageError(str(e)) from e

        logger.info(
            "Hazard report %s: %s -> %s by %s", report_id, previous, status.value, actor.username,
        )
        return report
