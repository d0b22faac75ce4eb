"""
Save transfer API endpoints.

Export the caught state as a compact blob and import it back.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from dextracker.api.dependencies import get_tracker, persist
from dextracker.db.database import get_session
from dextracker.services.tracker import Tracker

router = APIRouter(prefix="/transfer", tags=["transfer"])


class ExportResponse(BaseModel):
    """Encoded caught state."""

    data: str
    compressed: bool


class ImportRequest(BaseModel):
    """Request model for importing a save."""

    data: str = Field(
        ...,
        description="Save blob: minified JSON or its base64/zlib frame",
        examples=['[{"id":1,"variants":[{"type":"Normal","caught":true}]}]'],
    )


class ImportResponse(BaseModel):
    """Response model for a save import."""

    applied: int = Field(..., description="Variant flags applied from the save")
    caught: int
    total: int


@router.get("/export", response_model=ExportResponse)
async def export_save(
    tracker: Annotated[Tracker, Depends(get_tracker)],
    compress: Annotated[bool, Query(description="zlib + base64 frame")] = True,
) -> ExportResponse:
    """Export every Pokémon with at least one caught variant."""
    return ExportResponse(data=tracker.export(compress=compress), compressed=compress)


@router.post("/import", response_model=ImportResponse)
async def import_save(
    request: ImportRequest,
    tracker: Annotated[Tracker, Depends(get_tracker)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ImportResponse:
    """
    Merge a save into the catalogue.

    Variants absent from the save keep their flag. A malformed save is
    rejected with 400 and nothing changes.
    """
    if not request.data or not request.data.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Import data cannot be empty",
        )

    # ImportValidationError propagates to the KnownError handler
    applied = tracker.apply_import(request.data)
    await persist(session, tracker)

    progress = tracker.progress()
    return ImportResponse(applied=applied, caught=progress.caught, total=progress.total)
