"""
Snapshot store operations.

load/save/delete of the catalogue snapshot. Parsing on load goes through
the same validation as a freshly fetched catalogue.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dextracker.models.db import CatalogueSnapshotDB
from dextracker.models.pokemon import Pokemon
from dextracker.parsers.catalogue_json import catalogue_to_list, parse_catalogue


async def get_snapshot(session: AsyncSession, key: str) -> CatalogueSnapshotDB | None:
    """Get the snapshot row for a key, or None."""
    result = await session.execute(
        select(CatalogueSnapshotDB).where(CatalogueSnapshotDB.key == key)
    )
    return result.scalar_one_or_none()


async def load_snapshot(session: AsyncSession, key: str) -> list[Pokemon] | None:
    """
    Load the saved catalogue.

    Returns None if nothing has been saved under this key.

    Raises:
        CatalogueLoadError: If the stored payload is not a valid catalogue
    """
    snapshot = await get_snapshot(session, key)
    if snapshot is None:
        return None
    return parse_catalogue(snapshot.payload)


async def save_snapshot(
    session: AsyncSession, key: str, catalogue: list[Pokemon]
) -> CatalogueSnapshotDB:
    """Create or replace the saved catalogue."""
    payload = catalogue_to_list(catalogue)

    snapshot = await get_snapshot(session, key)
    if snapshot is None:
        snapshot = CatalogueSnapshotDB(key=key, payload=payload)
        session.add(snapshot)
    else:
        snapshot.payload = payload

    await session.flush()
    return snapshot


async def delete_snapshot(session: AsyncSession, key: str) -> bool:
    """
    Delete the saved catalogue.

    Returns True if deleted, False if not found.
    """
    snapshot = await get_snapshot(session, key)
    if snapshot is None:
        return False

    await session.delete(snapshot)
    await session.flush()
    return True
