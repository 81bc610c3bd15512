"""Database Session Manager — engine selection, rollback, error mapping."""

import pytest
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from user_management_api.core.errors import DatabaseError, DuplicateEmailError
from user_management_api.infrastructure.database import DatabaseSessionManager
from user_management_api.models.user import User


@pytest.fixture
async def manager():
    m = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await m.create_all()
    yield m
    await m.dispose()


async def test_memory_sqlite_uses_static_pool(manager):
    assert isinstance(manager.engine.pool, StaticPool)


async def test_sessions_share_the_in_memory_table(manager):
    async with manager.session() as db:
        user = User(name="Noura", password_hash="x")
        user.set_email("noura@example.com")
        db.add(user)
        await db.commit()

    async with manager.session() as db:
        count = (await db.execute(text("SELECT COUNT(*) FROM users"))).scalar_one()
    assert count == 1


async def test_health_check_true_when_reachable(manager):
    assert await manager.health_check() is True


async def test_sqlalchemy_errors_are_mapped_to_database_error(manager):
    with pytest.raises(DatabaseError) as exc:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))
    assert exc.value.http_status == 500


async def test_domain_errors_pass_through_after_rollback(manager):
    with pytest.raises(DuplicateEmailError):
        async with manager.session() as db:
            user = User(name="Noura", password_hash="x")
            user.set_email("noura@example.com")
            db.add(user)
            await db.flush()
            raise DuplicateEmailError("noura@example.com")

    async with manager.session() as db:
        count = (await db.execute(text("SELECT COUNT(*) FROM users"))).scalar_one()
    assert count == 0
