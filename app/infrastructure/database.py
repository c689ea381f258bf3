"""Database engine, session factory and schema helpers."""

from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.infrastructure.config import settings

Base = declarative_base()


def build_engine(url: str | None = None) -> AsyncEngine:
    """Create an async engine for the given URL.

    SQLite files get a busy timeout so concurrent writers wait instead of
    failing immediately; other backends use a pre-pinged pool.
    """
    url = url or settings.database_url
    if make_url(url).get_backend_name() == "sqlite":
        return create_async_engine(url, echo=settings.debug, connect_args={"timeout": 30})
    return create_async_engine(url, echo=settings.debug, pool_pre_ping=True)


engine = build_engine()

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create the catalog tables if they are missing."""
    import app.catalog.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(bind: AsyncEngine | None = None) -> None:
    """Drop the catalog tables."""
    import app.catalog.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def ping(session: AsyncSession) -> None:
    """Round-trip a trivial statement; raises if the database is unreachable."""
    await session.execute(text("SELECT 1"))


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session.

    Commits when the request handler returns, rolls back when it raises.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
