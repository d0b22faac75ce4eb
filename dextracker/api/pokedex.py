"""
Pokédex API endpoints.

Serves the filtered, variant-grouped catalogue and the caught toggle.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from dextracker.api.dependencies import get_tracker, hold_snapshot_lock, persist
from dextracker.config import settings
from dextracker.db.database import get_session
from dextracker.db.operations import delete_snapshot, save_snapshot
from dextracker.models.pokemon import Pokemon, Rarity, VariantType
from dextracker.models.projection import GroupView, Progress, RouteEstimate
from dextracker.services.catalogue import acquire_catalogue
from dextracker.services.tracker import Tracker

router = APIRouter(prefix="/pokedex", tags=["pokedex"])


class CellResponse(BaseModel):
    """One card in an evolution row."""

    pokemon_id: int
    name: str
    rarity: Rarity
    variant: VariantType
    caught: bool


class GroupResponse(BaseModel):
    """A variant group: rows of exactly six cells, empty slots as null."""

    type: VariantType
    rows: list[list[CellResponse | None]] = Field(default_factory=list)


class EstimateResponse(BaseModel):
    """Route chance and completion for the selected area."""

    chance: int | None = Field(
        default=None,
        description="N in '1 in N'; null once the area is complete",
    )
    complete: bool = False
    caught: int = 0
    total: int = 0


class ProgressResponse(BaseModel):
    """Catalogue-wide caught counter."""

    caught: int = 0
    total: int = 0


class PokedexResponse(BaseModel):
    """Projection for the requested filters."""

    groups: list[GroupResponse] = Field(default_factory=list)
    estimate: EstimateResponse | None = None
    progress: ProgressResponse


class VariantResponse(BaseModel):
    type: VariantType
    caught: bool


class PokemonResponse(BaseModel):
    """A Pokémon with its caught flags."""

    id: int
    name: str
    rarity: Rarity
    variants: list[VariantResponse] = Field(default_factory=list)


class LocationsResponse(BaseModel):
    locations: list[str] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    """Response model for clearing progress."""

    deleted: bool
    message: str = ""


def group_to_response(group: GroupView) -> GroupResponse:
    rows = [
        [
            CellResponse(
                pokemon_id=cell.pokemon_id,
                name=cell.name,
                rarity=cell.rarity,
                variant=cell.variant,
                caught=cell.caught,
            )
            if cell is not None
            else None
            for cell in row
        ]
        for row in group.rows
    ]
    return GroupResponse(type=group.type, rows=rows)


def estimate_to_response(estimate: RouteEstimate) -> EstimateResponse:
    return EstimateResponse(
        chance=estimate.chance,
        complete=estimate.complete,
        caught=estimate.caught,
        total=estimate.total,
    )


def progress_to_response(progress: Progress) -> ProgressResponse:
    return ProgressResponse(caught=progress.caught, total=progress.total)


def pokemon_to_response(pokemon: Pokemon) -> PokemonResponse:
    return PokemonResponse(
        id=pokemon.id,
        name=pokemon.name,
        rarity=pokemon.rarity,
        variants=[VariantResponse(type=v.type, caught=v.caught) for v in pokemon.variants],
    )


@router.get("", response_model=PokedexResponse)
async def get_pokedex(
    tracker: Annotated[Tracker, Depends(get_tracker)],
    hide_caught: Annotated[
        bool | None, Query(description="Hide variant groups that are fully caught")
    ] = None,
) -> PokedexResponse:
    """
    Get the variant-grouped catalogue for the given filters.

    With no filter set the groups are empty. The estimate is only present
    when location, time and type are all set and something is displayed.
    """
    if hide_caught is not None:
        tracker.set_hide_caught(hide_caught)

    snapshot = tracker.snapshot()

    return PokedexResponse(
        groups=[group_to_response(group) for group in snapshot.groups],
        estimate=estimate_to_response(snapshot.estimate) if snapshot.estimate else None,
        progress=progress_to_response(snapshot.progress),
    )


@router.get("/locations", response_model=LocationsResponse)
async def get_locations(
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> LocationsResponse:
    """Distinct places, routes first by number, then alphabetically."""
    return LocationsResponse(locations=tracker.locations())


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> ProgressResponse:
    """Caught variants over obtainable variants across the catalogue."""
    return progress_to_response(tracker.progress())


@router.post("/{pokemon_id}/variants/{variant_type}/toggle", response_model=PokemonResponse)
async def toggle_caught(
    pokemon_id: int,
    variant_type: VariantType,
    tracker: Annotated[Tracker, Depends(get_tracker)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PokemonResponse:
    """Flip a variant's caught flag and save the catalogue."""
    try:
        tracker.toggle_caught(pokemon_id, variant_type)
    except KeyError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No {variant_type.value} variant for Pokémon {pokemon_id}",
        ) from e

    await persist(session, tracker)
    return pokemon_to_response(tracker.get_pokemon(pokemon_id))


@router.delete("", response_model=DeleteResponse)
async def clear_progress(
    _lock: Annotated[None, Depends(hold_snapshot_lock)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteResponse:
    """
    Clear all progress.

    Irreversible: the saved catalogue is dropped and reloaded from the
    catalogue source with every variant uncaught.
    """
    deleted = await delete_snapshot(session, settings.snapshot_key)
    catalogue = await acquire_catalogue()
    await save_snapshot(session, settings.snapshot_key, catalogue)

    if deleted:
        message = "Your progress has been cleared."
    else:
        message = "No saved progress found."

    return DeleteResponse(deleted=deleted, message=message)
