from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from config.settings import settings
from data.schema import Base


class Database:
    """Engine + session factory for the synced-state store."""

    def __init__(self, url: str | None = None) -> None:
        self.url = url or settings.DATABASE_URL
        # SQLite connections are cheap and must not be shared across event loops.
        kwargs = {"poolclass": NullPool} if self.url.startswith("sqlite") else {}
        self.engine = create_async_engine(self.url, echo=False, **kwargs)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    async def init(self) -> None:
        """Create all tables (idempotent)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            if self.url.startswith("sqlite") and ":memory:" not in self.url:
                await conn.execute(text("PRAGMA journal_mode=WAL"))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        await self.engine.dispose()
