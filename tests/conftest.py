"""
DressStore Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock AsyncSession (service unit tests, no DB)
    ├── sample_product_data: Field values for a stored product
    ├── database: Database handle on a fresh SQLite file, tables created
    └── test_client: HTTPX AsyncClient wired to an app using `database`
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Override settings for testing BEFORE any dressstore imports
# Why: dressstore.main builds a module-level app from these settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="dressstore_test_"), "default.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SEED_ON_STARTUP"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from dressstore.config import Settings
from dressstore.database import Database
from dressstore.main import create_app


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_product(mock_db_session):
            mock_db_session.get.return_value = product
            result = await product_service.get_product(mock_db_session, str(product.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.delete = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_product_data():
    """Field values matching the Product model."""
    return {
        "id": uuid4(),
        "name": "Jacket",
        "description": "Leather Jacket with Fur",
        "price": 100.0,
        "quantity": 10,
        "category": "Men",
        "created_at": datetime.now(timezone.utc),
    }


@pytest.fixture
def test_settings():
    return Settings(seed_on_startup=False, log_level="WARNING")


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    Provides a connected Database on a throwaway SQLite file.

    A file (not :memory:) so every pooled connection sees the same data.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await db.connect()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database, test_settings):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the `database` fixture
    connects the store itself and no seed data is inserted.
    """
    app = create_app(settings=test_settings, database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
