"""
DressStore Backend: Database Handle & Session Management
==========================================================

What:  The `Database` handle (engine + session factory), the declarative Base,
       and the FastAPI session dependency.
Why:   The engine and its pool are the only shared resource in the process.
       Owning them in one explicitly constructed object lets the app factory
       inject a different store in tests.
How:   `create_app()` builds a `Database` (or receives one) and stores it on
       `app.state.database`. `get_db_session` reads it from there per request.
When:  Handle is created once per app; sessions are created per request.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20, max_overflow=10, pool_pre_ping, pool_recycle=3600.
    SQLite URLs fall back to SQLAlchemy's own pool choice for the driver.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    `Database.connect()` creates every table registered on this metadata.
    """
    pass


class Database:
    """
    Process-wide handle on the product store.

    Attributes:
        url:              Connection URL (password hidden in logs)
        engine:           Async engine owning the connection pool
        session_factory:  Creates AsyncSession instances bound to the engine
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = make_url(url)
        engine_kwargs = {"echo": echo}
        if self.url.get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)

        # expire_on_commit=False: handlers read attributes after commit to
        # build the response, outside any lazy-load context
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings) -> "Database":
        """Builds the handle from application settings."""
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    async def connect(self) -> None:
        """
        Verify connectivity and create any missing tables.

        Raises whatever the driver raises when the server is unreachable;
        the lifespan handler logs it and carries on without seeding.
        """
        # Models must be imported so their tables are registered on Base
        from dressstore.models import category, product  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
        logger.info(
            "Connected to database %s",
            self.url.render_as_string(hide_password=True),
        )

    async def ping(self) -> bool:
        """Lightweight connectivity probe used by the health check."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections. Called during application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session comes from the `Database` stored on `app.state`. Services
    commit their own writes; anything left pending is committed here, and any
    error rolls the session back before propagating to the exception handlers.

    Example usage in a route:
        @router.get("/product")
        async def list_products(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("No database configured on the application")

    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
