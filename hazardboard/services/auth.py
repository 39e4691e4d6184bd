"""Authentication service: accounts, bcrypt passwords, DB-backed sessions."""

from __future__ import annotations

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone, timedelta

import bcrypt
from fastapi import Request
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hazardboard.db import crud
from hazardboard.errors import (
    AuthenticationError, DuplicateUsernameError, StorageError, ValidationError,
)
from hazardboard.models import Account, Role

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "session_token"

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
MAX_PASSWORD_BYTES = 72


@dataclass
class AuthContext:
    account_id: str
    username: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.administrator

    @classmethod
    def from_account(cls, account: Account) -> "AuthContext":
        return cls(account_id=account.id, username=account.username, role=Role(account.role))


def normalize_username(username: str) -> str:
    return username.strip()


def _password_too_long(plain: str) -> bool:
    return len(plain.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    if _password_too_long(plain):
        return False
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def _hash_token(token: str) -> str:
    """SHA-256 hash of a session token for DB storage."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


async def register_account(
    db: AsyncSession, username: str, password: str, role: Role = Role.employee
) -> Account:
    """Create an account. Raises DuplicateUsernameError if the name is taken."""
    username = normalize_username(username)
    if not username or not password:
        raise ValidationError("username and password are required")
    if _password_too_long(password):
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")

    if await crud.get_account_by_username(db, username):
        raise DuplicateUsernameError(username)

    try:
        account = await crud.create_account(db, username, hash_password(password), role.value)
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same name
        await db.rollback()
        raise DuplicateUsernameError(username) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Failed to create account %s", username)
        raise StorageError(str(e)) from e

    logger.info("Registered %s account %s", role.value, username)
    return account


async def authenticate(db: AsyncSession, username: str, password: str) -> Account | None:
    """Return the account if the credentials match, else None."""
    account = await crud.get_account_by_username(db, normalize_username(username))
    if not account or not verify_password(password, account.password_hash):
        return None
    return account


async def create_session(
    account: Account, db: AsyncSession, max_age_days: int, ip_address: str = "",
) -> str:
    """Create a DB-backed session. Returns the raw token (not the hash)."""
    token = secrets.token_urlsafe(48)
    expires_at = datetime.now(timezone.utc) + timedelta(days=max_age_days)
    await crud.create_account_session(
        db, account.id, _hash_token(token), expires_at, ip_address=ip_address,
    )
    return token


async def validate_session(token: str, db: AsyncSession) -> Account | None:
    """Look up session by token hash, return Account if valid."""
    session = await crud.get_live_session(db, _hash_token(token))
    if not session:
        return None
    return await crud.get_account(db, session.account_id)


async def remove_session(token: str, db: AsyncSession) -> None:
    await crud.delete_session_by_hash(db, _hash_token(token))


async def get_current_user(request: Request, db: AsyncSession) -> AuthContext:
    """Read session cookie, validate, return AuthContext or raise AuthenticationError."""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        raise AuthenticationError("Not authenticated")

    account = await validate_session(token, db)
    if not account:
        raise AuthenticationError("Session expired")

    return AuthContext.from_account(account)


async def ensure_default_admin(db: AsyncSession, username: str, password: str) -> Account:
    """Create the seeded administrator account if it does not exist yet."""
    existing = await crud.get_account_by_username(db, normalize_username(username))
    if existing:
        return existing
    account = await register_account(db, username, password, role=Role.administrator)
    logger.info("Seeded default administrator %s", username)
    return account
