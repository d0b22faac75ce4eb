"""
Health check endpoints.

Liveness, plus a readiness check that reports database connectivity and
whether a catalogue snapshot has been saved yet.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dextracker.config import settings
from dextracker.db.database import get_session
from dextracker.db.operations import get_snapshot

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    catalogue: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check; does not touch the database."""
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness check.

    Returns 503 if the snapshot store is unreachable. A missing snapshot is
    still ready: the catalogue is acquired on first use.
    """
    try:
        snapshot = await get_snapshot(session, settings.snapshot_key)
    except SQLAlchemyError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database="disconnected")

    return HealthResponse(
        status="ready",
        database="connected",
        catalogue="saved" if snapshot is not None else "not loaded",
    )
