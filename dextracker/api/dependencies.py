"""
Shared API dependencies.

Each request rebuilds a Tracker from the persisted snapshot. When no
snapshot exists the catalogue is acquired from the catalogue source and
saved immediately.

Tracker requests hold the snapshot lock until their session has
committed, so a toggle or import always starts from the latest save.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from dextracker.config import settings
from dextracker.db.database import get_session, snapshot_lock
from dextracker.db.operations import load_snapshot, save_snapshot
from dextracker.models.filters import FilterState
from dextracker.models.pokemon import LocationType, Pokemon, TimeOfDay, VariantType
from dextracker.services.catalogue import acquire_catalogue
from dextracker.services.tracker import Tracker

logger = logging.getLogger(__name__)


async def load_catalogue(session: AsyncSession) -> list[Pokemon]:
    """
    Saved catalogue, or a freshly acquired one (which is then saved).

    Raises:
        CatalogueLoadError: If no snapshot exists and the source fails
    """
    catalogue = await load_snapshot(session, settings.snapshot_key)
    if catalogue is not None:
        return catalogue

    logger.info("No saved catalogue under '%s', acquiring", settings.snapshot_key)
    catalogue = await acquire_catalogue()
    await save_snapshot(session, settings.snapshot_key, catalogue)
    return catalogue


async def persist(session: AsyncSession, tracker: Tracker) -> None:
    """Save the tracker's catalogue after a change."""
    await save_snapshot(session, settings.snapshot_key, tracker.catalogue)


def get_filters(
    location: Annotated[str | None, Query(description="Place name")] = None,
    time: Annotated[TimeOfDay | None, Query(description="Day or Night")] = None,
    type: Annotated[LocationType | None, Query(description="Land or Water")] = None,
    variant: Annotated[VariantType | None, Query(description="Variant type")] = None,
) -> FilterState:
    """Filter state from query parameters; blank location means unconstrained."""
    return FilterState(location=location or None, time=time, type=type, variant=variant)


async def hold_snapshot_lock() -> AsyncGenerator[None, None]:
    """Hold the snapshot lock for the rest of the request."""
    async with snapshot_lock(settings.snapshot_key):
        yield


async def get_tracker(
    _lock: Annotated[None, Depends(hold_snapshot_lock)],
    session: Annotated[AsyncSession, Depends(get_session)],
    filters: Annotated[FilterState, Depends(get_filters)],
) -> Tracker:
    """Tracker over the saved catalogue with filters from the query."""
    catalogue = await load_catalogue(session)
    return Tracker(catalogue, filters=filters, hide_caught=settings.hide_caught)
