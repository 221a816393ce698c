from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from tablegen.core.config import settings

# Base class for models
Base = declarative_base()

engine = create_async_engine(settings.DATABASE_URL, future=True, echo=settings.SQL_ECHO)

SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def init_models() -> None:
    """Create missing tables for a fresh database"""
    # models must be imported so they register on Base.metadata
    import tablegen.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
