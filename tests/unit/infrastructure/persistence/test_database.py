"""Unit tests for DatabaseManager."""

import pytest
from sqlalchemy import inspect, text

from usermanagement.core.config import Settings
from usermanagement.infrastructure.persistence.database import DatabaseManager


def make_manager(database_url: str) -> DatabaseManager:
    return DatabaseManager(Settings(_env_file=None, database_url=database_url))


def test_ensure_sqlite_directory_creates_parents(tmp_path):
    manager = make_manager(f"sqlite+aiosqlite:///{tmp_path / 'nested' / 'dir' / 'app.db'}")

    manager.ensure_sqlite_directory()

    assert (tmp_path / "nested" / "dir").is_dir()


def test_ensure_sqlite_directory_relative_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    make_manager("sqlite+aiosqlite:///./data/app.db").ensure_sqlite_directory()

    assert (tmp_path / "data").is_dir()


def test_ensure_sqlite_directory_ignores_memory_database(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    make_manager("sqlite+aiosqlite:///:memory:").ensure_sqlite_directory()

    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_init_database_creates_accounts_table(tmp_path):
    manager = make_manager(f"sqlite+aiosqlite:///{tmp_path / 'data' / 'app.db'}")

    try:
        await manager.init_database()
        assert await manager.check_connection() is True
        async with manager.engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    finally:
        await manager.disconnect()

    assert "accounts" in tables
    assert (tmp_path / "data" / "app.db").is_file()


@pytest.mark.asyncio
async def test_init_database_fails_when_unreachable(tmp_path):
    manager = make_manager(f"sqlite+aiosqlite:///{tmp_path}")

    try:
        assert await manager.check_connection() is False
        with pytest.raises(RuntimeError, match="Failed to connect to database"):
            await manager.init_database()
    finally:
        await manager.disconnect()


@pytest.mark.asyncio
async def test_session_rolls_back_on_error(tmp_path):
    manager = make_manager(f"sqlite+aiosqlite:///{tmp_path / 'app.db'}")
    insert = text(
        "INSERT INTO accounts (id, email, password_hash, first_name, last_name,"
        " is_deleted, created_at, updated_at)"
        " VALUES ('acc_1', 'a@x.com', 'h', 'A', 'B', 0,"
        " '2024-01-01 00:00:00', '2024-01-01 00:00:00')"
    )

    try:
        await manager.init_database()
        with pytest.raises(ValueError):
            async with manager.session() as session:
                await session.execute(insert)
                raise ValueError("abort")
        async with manager.session() as session:
            count = await session.scalar(text("SELECT COUNT(*) FROM accounts"))
    finally:
        await manager.disconnect()

    assert count == 0
