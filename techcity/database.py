"""Async SQLAlchemy database setup."""

from pathlib import Path

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from techcity.config import DATABASE_PATH


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def get_database_url(path: str = DATABASE_PATH) -> str:
    """Get the SQLite database URL, ensuring the data directory exists."""
    db_path = Path(path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{db_path.resolve()}"


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build a session factory bound to ``engine``."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


engine = create_async_engine(get_database_url(), echo=False)

async_session = make_session_factory(engine)


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create every table registered on ``Base``."""
    # Register models on the metadata before create_all
    import techcity.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncSession:
    """Dependency for getting async database sessions."""
    async with async_session() as session:
        yield session


def get_session():
    """Context manager for getting async database sessions outside of FastAPI routes."""
    return async_session()
