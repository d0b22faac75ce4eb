"""
Snapshot store connection.

The whole catalogue lives in one JSON row, so every change is a
load -> change -> save of that row. snapshot_lock serializes those cycles
per snapshot key; without it two concurrent toggles would each save a
catalogue missing the other's flag.
"""

import asyncio
import weakref
from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from dextracker.config import settings
from dextracker.models.db import Base

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# asyncio locks belong to one event loop, so keep a set per running loop
_snapshot_locks: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, dict[str, asyncio.Lock]] = (
    weakref.WeakKeyDictionary()
)


def snapshot_lock(key: str) -> asyncio.Lock:
    """Lock guarding the load/save cycle of one snapshot key."""
    locks = _snapshot_locks.setdefault(asyncio.get_running_loop(), {})
    if key not in locks:
        locks[key] = asyncio.Lock()
    return locks[key]


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Session for one request's snapshot reads and writes.

    The snapshot save is committed when the request finishes; a database
    error rolls the whole request back, so a failed toggle or import never
    leaves a half-written catalogue.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create the snapshot table if it does not exist yet (app startup)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
