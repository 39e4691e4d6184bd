"""CRUD operations for accounts, sessions and hazard reports."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hazardboard.models import Account, AccountSession, HazardReport


# ── Account ───────────────────────────────────────────────

async def create_account(
    db: AsyncSession, username: str, password_hash: str, role: str = "employee"
) -> Account:
    account = Account(username=username, password_hash=password_hash, role=role)
    db.add(account)
    await db.commit()
    await db.refresh(account)
    return account


async def get_account(db: AsyncSession, account_id: str) -> Account | None:
    return await db.get(Account, account_id)


async def get_account_by_username(db: AsyncSession, username: str) -> Account | None:
    result = await db.execute(select(Account).where(Account.username == username))
    return result.scalars().first()


# ── AccountSession ────────────────────────────────────────

async def create_account_session(
    db: AsyncSession, account_id: str, token_hash: str,
    expires_at: datetime, ip_address: str = "",
) -> AccountSession:
    session = AccountSession(
        account_id=account_id, token_hash=token_hash,
        expires_at=expires_at, ip_address=ip_address,
    )
    db.add(session)
    await db.commit()
    return session


async def get_live_session(db: AsyncSession, token_hash: str) -> AccountSession | None:
    result = await db.execute(
        select(AccountSession).where(
            AccountSession.token_hash == token_hash,
            AccountSession.expires_at > datetime.now(timezone.utc),
        )
    )
    return result.scalars().first()


async def delete_session_by_hash(db: AsyncSession, token_hash: str) -> None:
    result = await db.execute(
        select(AccountSession).where(AccountSession.token_hash == token_hash)
    )
    session = result.scalars().first()
    if session:
        await db.delete(session)
        await db.commit()


# ── HazardReport ──────────────────────────────────────────

async def create_hazard(
    db: AsyncSession, user_id: str, type: str, location: str,
    risk_level: str, description: str, image_url: str | None = None,
) -> HazardReport:
    hazard = HazardReport(
        user_id=user_id, type=type, location=location,
        risk_level=risk_level, description=description,
        image_url=image_url, status="open", remarks="",
    )
    db.add(hazard)
    await db.commit()
    await db.refresh(hazard)
    return hazard


async def get_hazard(db: AsyncSession, hazard_id: str) -> HazardReport | None:
    return await db.get(HazardReport, hazard_id)


async def list_hazards_with_reporter(db: AsyncSession) -> list[tuple[HazardReport, str]]:
    """All reports newest-first, paired with the owner's username."""
    result = await db.execute(
        select(HazardReport, Account.username)
        .join(Account, HazardReport.user_id == Account.id)
        .order_by(HazardReport.created_at.desc(), HazardReport.id.desc())
    )
    return [(hazard, username) for hazard, username in result.all()]


async def list_hazards_for_user(db: AsyncSession, user_id: str) -> list[HazardReport]:
    result = await db.execute(
        select(HazardReport)
        .where(HazardReport.user_id == user_id)
        .order_by(HazardReport.created_at.desc(), HazardReport.id.desc())
    )
    return list(result.scalars().all())


async def update_hazard(db: AsyncSession, hazard: HazardReport, **kwargs) -> HazardReport:
    for k, v in kwargs.items():
        if v is not None:
            setattr(hazard, k, v)
    await db.commit()
    await db.refresh(hazard)
    return hazard
