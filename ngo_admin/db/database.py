"""
Database configuration and connection management
"""

import json

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy import MetaData
import structlog

from ngo_admin.core.config import settings

logger = structlog.get_logger()


def json_serializer(value) -> str:
    """JSON encoder for list columns; non-ASCII text is stored unescaped"""
    return json.dumps(value, ensure_ascii=False)


def _engine_options(database_url: str) -> dict:
    """Pool options only apply to server databases"""
    options = {
        "echo": False,
        "future": True,
        "pool_pre_ping": True,
        "json_serializer": json_serializer,
    }
    if not database_url.startswith("sqlite"):
        options.update(
            pool_recycle=300,
            pool_size=5,
            max_overflow=5,
            pool_timeout=30,
        )
    return options


# Create async engine
engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# Create async session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

# Create declarative base with naming convention for constraints
metadata = MetaData(naming_convention={
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
})

Base = declarative_base(metadata=metadata)


async def create_tables():
    """Create all database tables for the registered models"""
    # Import all models so they are registered on the metadata
    from ngo_admin import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created", tables=sorted(Base.metadata.tables))


async def get_db():
    """Database session dependency for FastAPI"""
    async with async_session_factory() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error("Database session error", error=str(e))
            raise
        finally:
            await session.close()
