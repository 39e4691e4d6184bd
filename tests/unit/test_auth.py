import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hazardboard.errors import DuplicateUsernameError, ValidationError
from hazardboard.models import Base, Role
from hazardboard.services.auth import (
    MAX_PASSWORD_BYTES, AuthContext, authenticate, create_session, ensure_default_admin,
    register_account, remove_session, validate_session,
)


@pytest_asyncio.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


async def test_register_and_authenticate(db):
    account = await register_account(db, "alice", "pw1")
    assert account.role == "employee"
    assert account.password_hash != "pw1"

    assert (await authenticate(db, "alice", "pw1")).id == account.id
    assert await authenticate(db, "alice", "wrong") is None
    assert await authenticate(db, "nobody", "pw1") is None


async def test_duplicate_username_rejected(db):
    await register_account(db, "alice", "pw1")
    with pytest.raises(DuplicateUsernameError):
        await register_account(db, "alice", "pw2")


async def test_blank_username_rejected(db):
    with pytest.raises(ValidationError):
        await register_account(db, "   ", "pw")


async def test_overlong_password_rejected_at_registration(db):
    with pytest.raises(ValidationError):
        await register_account(db, "alice", "x" * (MAX_PASSWORD_BYTES + 1))
    assert await authenticate(db, "alice", "x" * (MAX_PASSWORD_BYTES + 1)) is None


async def test_password_limit_counts_bytes_not_characters(db):
    # 36 two-byte characters fit, 37 do not
    account = await register_account(db, "alice", "\u00e9" * 36)
    assert (await authenticate(db, "alice", "\u00e9" * 36)).id == account.id
    with pytest.raises(ValidationError):
        await register_account(db, "bob", "\u00e9" * 37)


async def test_overlong_password_at_login_is_a_plain_mismatch(db):
    await ensure_default_admin(db, "admin", "admin123")
    assert await authenticate(db, "admin", "y" * 100) is None


async def test_usernames_are_trimmed(db):
    account = await register_account(db, " alice ", "pw1")
    assert account.username == "alice"
    assert (await authenticate(db, " alice ", "pw1")).id == account.id
    assert (await authenticate(db, "alice", "pw1")).id == account.id
    with pytest.raises(DuplicateUsernameError):
        await register_account(db, "alice  ", "pw2")


async def test_session_round_trip(db):
    account = await register_account(db, "alice", "pw1")
    token = await create_session(account, db, max_age_days=7)

    assert (await validate_session(token, db)).id == account.id
    assert await validate_session("not-a-token", db) is None

    await remove_session(token, db)
    assert await validate_session(token, db) is None


async def test_ensure_default_admin_is_idempotent(db):
    first = await ensure_default_admin(db, "admin", "admin123")
    second = await ensure_default_admin(db, "admin", "admin123")
    assert first.id == second.id
    assert first.role == Role.administrator.value
    assert (await authenticate(db, "admin", "admin123")) is not None


async def test_auth_context_from_account(db):
    admin = await ensure_default_admin(db, "admin", "admin123")
    alice = await register_account(db, "alice", "pw1")

    assert AuthContext.from_account(admin).is_admin
    assert not AuthContext.from_account(alice).is_admin
    assert AuthContext.from_account(alice).role is Role.employee
