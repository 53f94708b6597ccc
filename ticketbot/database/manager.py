import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from config.settings import settings

from .models import Base

logger = logging.getLogger(__name__)


def to_async_url(database_url: str) -> tuple[str, dict[str, Any]]:
    """Map a plain database URL to its async driver URL and engine options."""
    if database_url.startswith("sqlite"):
        # sqlite:/// -> sqlite+aiosqlite:///
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1), {
            "connect_args": {"check_same_thread": False},
        }
    if database_url.startswith("postgresql"):
        # postgresql:// -> postgresql+asyncpg://
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1), {
            "pool_size": 20,
            "max_overflow": 30,
            "pool_pre_ping": True,
            "pool_recycle": 300,
        }
    raise ValueError(f"Unsupported database URL: {database_url}")


class DatabaseManager:
    def __init__(self, database_url: str | None = None) -> None:
        self.database_url = database_url or settings.database_url
        async_url, engine_kwargs = to_async_url(self.database_url)
        self.engine: AsyncEngine = create_async_engine(async_url, echo=settings.debug, **engine_kwargs)
        self.session_factory = async_sessionmaker(bind=self.engine, class_=AsyncSession, expire_on_commit=False)

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection closed")


# Global database manager instance
db_manager = DatabaseManager()
