"""Async SQLAlchemy engine and session management."""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Declarative base for all ORM tables."""


class Database:
    """Owns the async engine and hands out sessions."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_kwargs: dict = {"echo": echo}
        if url.endswith(":memory:"):
            # A single shared connection keeps the in-memory database alive
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine, expire_on_commit=False, class_=AsyncSession
        )

    @property
    def supports_row_locks(self) -> bool:
        return self.engine.dialect.name != "sqlite"

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Provide a session that is closed on exit."""
        async with self.session_factory() as session:
            yield session

    async def create_tables(self) -> None:
        """Create every table registered on ``Base``."""
        # Register ORM tables on Base.metadata
        from .. import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def close(self) -> None:
        await self.engine.dispose()


_db: Optional[Database] = None


def init_db(url: str, echo: bool = False) -> Database:
    """Initialize the global database instance."""
    global _db
    _db = Database(url, echo=echo)
    return _db


def get_db() -> Database:
    """Get the global database instance.

    Raises:
        RuntimeError: If the database has not been initialized
    """
    if _db is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _db
