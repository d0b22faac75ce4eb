"""
Route API endpoints.

Encounter chance for a single area and the best-area recommendation.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from dextracker.api.dependencies import get_tracker
from dextracker.api.pokedex import EstimateResponse, estimate_to_response
from dextracker.models.pokemon import LocationType, TimeOfDay
from dextracker.services.tracker import Tracker

router = APIRouter(prefix="/routes", tags=["routes"])


class RecommendationResponse(BaseModel):
    """Best area to hunt in; all fields null once everything is caught."""

    place: str | None = None
    type: LocationType | None = None
    time: TimeOfDay | None = None
    chance: int | None = Field(
        default=None,
        description="N in '1 in N' for the recommended area",
    )


@router.get("/chance", response_model=EstimateResponse)
async def get_route_chance(
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> EstimateResponse:
    """
    Encounter chance for the area given by location, time and type.

    Returns 400 if any of the three is missing and 404 if nothing is
    displayed for that area.
    """
    if not tracker.filters.has_area():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="location, time and type are all required",
        )

    estimate = tracker.estimate()
    if estimate is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No Pokémon found for this area",
        )

    return estimate_to_response(estimate)


@router.get("/recommend", response_model=RecommendationResponse)
async def recommend(
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> RecommendationResponse:
    """
    Recommend the area with the best chance of a new catch.

    Honors the time filter if given; otherwise considers both times.
    """
    area = tracker.recommend()
    if area is None:
        return RecommendationResponse()

    chance = tracker.area_index()[area.place][area.type][area.time]
    return RecommendationResponse(place=area.place, type=area.type, time=area.time, chance=chance)
