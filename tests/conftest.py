"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from usermanagement.application.services import create_account_service
from usermanagement.core.config import get_settings
from usermanagement.domain.entities import RegisterAccountRequest
from usermanagement.domain.services import AccountService
from usermanagement.infrastructure.auth import SecretEncoder
from usermanagement.infrastructure.persistence.database import Base
from usermanagement.infrastructure.persistence.repositories import InMemoryAccountRepository


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached per process; reset them around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def encoder() -> SecretEncoder:
    """Argon2 encoder with minimal cost so tests stay fast."""
    return SecretEncoder(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    """Empty in-memory account repository."""
    return InMemoryAccountRepository()


@pytest.fixture
def account_service(repository, encoder) -> AccountService:
    """Account service with the default pipelines over the in-memory repository."""
    return create_account_service(repository, encoder=encoder)


@pytest.fixture
def register_request() -> RegisterAccountRequest:
    """A valid registration request."""
    return RegisterAccountRequest(
        email="a@x.com",
        password="Abcdef1!",
        first_name="A",
        last_name="B",
    )


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    from usermanagement.infrastructure.persistence import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()
