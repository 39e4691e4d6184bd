"""Account models: Account, AccountSession."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from hazardboard.models.base import Base, ULIDPrimaryKey, utcnow


class Role(str, Enum):
    employee = "employee"
    administrator = "administrator"


class Account(Base, ULIDPrimaryKey):
    __tablename__ = "accounts"

    username: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), default=Role.employee.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)


class AccountSession(Base, ULIDPrimaryKey):
    __tablename__ = "account_sessions"

    account_id: Mapped[str] = mapped_column(String(26), ForeignKey("accounts.id"))
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    ip_address: Mapped[str] = mapped_column(String(45), default="")
