"""
Database configuration and session management
"""
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from beloved.core.config import settings


def _engine_options(url: str) -> dict:
    options = {
        "echo": settings.ENVIRONMENT == "development",
        "future": True,
        "pool_pre_ping": True,
    }
    # SQLite drivers run without a sized connection pool
    if not url.startswith("sqlite"):
        options.update(pool_size=10, max_overflow=20)
    return options


# Create async engine
engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# Session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Base class for models
Base = declarative_base()


async def get_db() -> AsyncSession:
    """Dependency for getting database session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db():
    """Initialize database (create tables)"""
    from beloved.models import (
        Profile, DriverProfile, MemberNote, Ride, RideStatusHistory,
        CallLog, CallTranscript, WebhookEvent,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
