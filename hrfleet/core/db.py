import asyncio
import logging
from typing import AsyncGenerator

from sqlalchemy import BigInteger, Integer, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from hrfleet.core.config import settings
from hrfleet.core.errors import TransientStorageError

logger = logging.getLogger(__name__)

# SQLite only autoincrements INTEGER PRIMARY KEY columns
IdType = BigInteger().with_variant(Integer(), "sqlite")

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    autoflush=False,
    class_=AsyncSession,
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db(bind: AsyncEngine = engine) -> None:
    """
    Create every table registered on ``Base`` if it does not exist yet.
    """
    # register the models on Base.metadata
    from hrfleet import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def wait_for_db(
    bind: AsyncEngine = engine,
    retries: int = settings.DB_CONNECT_RETRIES,
    delay: float = settings.DB_RETRY_DELAY,
) -> None:
    """
    Ping the database until it answers, up to ``retries`` attempts.

    Raises TransientStorageError once every attempt has failed; the caller
    treats that as fatal.
    """
    for attempt in range(1, retries + 1):
        try:
            async with bind.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connection established")
            return
        except (SQLAlchemyError, OSError) as exc:
            logger.warning(
                "Database connection attempt %s/%s failed: %s",
                attempt,
                retries,
                exc,
            )
            if attempt < retries:
                await asyncio.sleep(delay)

    raise TransientStorageError(
        f"Could not connect to the database after {retries} attempts"
    )
