# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from farmstand.shared.config import load_config
from farmstand.shared.logging import logger

_config = load_config()


class Base(DeclarativeBase):
    pass


# Flask runs every async view on a fresh event loop, so pooled connections
# bound to an earlier loop cannot be reused.
ENGINE: AsyncEngine = create_async_engine(
    _config.database.url,
    echo=_config.database.echo,
    poolclass=NullPool,
)


@event.listens_for(ENGINE.sync_engine, "connect")
def _set_sqlite_pragmas(dbapi_conn, _):
    if not _config.database.url.startswith("sqlite"):
        return
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA journal_mode=WAL;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.execute("PRAGMA busy_timeout=30000;")
    finally:
        cur.close()


SessionLocal = async_sessionmaker(
    bind=ENGINE, autoflush=False, expire_on_commit=False
)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    session = SessionLocal()
    logger.debug("db.session: opened session")
    try:
        yield session
        await session.commit()
        logger.debug("db.session: committed session")
    except Exception:
        logger.debug("db.session: error, rolling back")
        await session.rollback()
        raise
    finally:
        await session.close()
        logger.debug("db.session: closed session")


async def init_db() -> None:
    from . import models  # noqa: F401  registers the tables on Base.metadata

    async with ENGINE.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured")


async def drop_db() -> None:
    from . import models  # noqa: F401

    async with ENGINE.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
