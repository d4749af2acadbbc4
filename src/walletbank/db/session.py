# walletbank/db/session.py
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from walletbank import config
from walletbank.logging_config import get_logger

logger = get_logger("walletbank.db.session")

Base = declarative_base()

DATABASE_URL: str = config.DATABASE_URL
engine: Optional[AsyncEngine] = None
AsyncSessionLocal: Optional[sessionmaker] = None


def configure_engine(url: str, echo: Optional[bool] = None) -> AsyncEngine:
    """
    (Re)build the async engine and session factory for `url`.

    Called once at import with DATABASE_URL; tests call it again to point the
    service at a throwaway database.
    """
    global DATABASE_URL, engine, AsyncSessionLocal

    kwargs = {}
    if url.startswith("sqlite"):
        # aiosqlite connections are bound to the loop that opened them
        kwargs["poolclass"] = NullPool

    DATABASE_URL = url
    engine = create_async_engine(
        url,
        echo=config.SQL_ECHO if echo is None else echo,
        future=True,
        **kwargs,
    )
    AsyncSessionLocal = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False, autocommit=False
    )
    logger.info("Storage engine configured url=%s", url.split("@")[-1])
    return engine


async def init_models() -> None:
    """
    Create any missing tables for the registered models.
    """
    # models must be imported so their tables are attached to Base.metadata
    from walletbank.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    if engine is not None:
        await engine.dispose()


configure_engine(DATABASE_URL)
