"""
Area index and route recommendation.

The index maps every place -> terrain -> time seen in the catalogue to the
"1 in N" chance of an uncaught encounter there. It is built once after the
catalogue loads and refreshed after caught flags change.
"""

import logging
import re
from collections.abc import Iterable, Sequence

from dextracker.engine.matcher import matches_area
from dextracker.engine.probability import compute_route_probability
from dextracker.models.failure import InvariantViolation
from dextracker.models.filters import FilterState
from dextracker.models.pokemon import LocationType, Pokemon, TimeOfDay
from dextracker.models.projection import Area, AreaIndex

logger = logging.getLogger(__name__)

# "Route 12" style names sort numerically ahead of named places
ROUTE_PATTERN = re.compile(r"^Route (\d+)$", re.IGNORECASE)

TYPE_ORDER: tuple[LocationType, ...] = (LocationType.LAND, LocationType.WATER)
TIME_ORDER: tuple[TimeOfDay, ...] = (TimeOfDay.DAY, TimeOfDay.NIGHT)


def sort_locations(places: Iterable[str]) -> list[str]:
    """
    Sort place names for display.

    Names like "Route 3" come first, ordered by route number; every other
    name follows in alphabetical order. Duplicates are dropped.
    """
    routes: list[tuple[int, str]] = []
    named: list[str] = []

    for place in dict.fromkeys(places):
        match = ROUTE_PATTERN.match(place)
        if match:
            routes.append((int(match.group(1)), place))
        else:
            named.append(place)

    routes.sort(key=lambda item: item[0])
    named.sort()
    return [place for _, place in routes] + named


def list_locations(catalogue: Sequence[Pokemon]) -> list[str]:
    """Distinct places in the catalogue, in display order."""
    return sort_locations(record.place for pokemon in catalogue for record in pokemon.locations)


def seed_area_index(catalogue: Sequence[Pokemon]) -> AreaIndex:
    """Group every location record by place, terrain and time, with empty values."""
    index: AreaIndex = {}
    for pokemon in catalogue:
        for record in pokemon.locations:
            index.setdefault(record.place, {}).setdefault(record.type, {})[record.time] = None
    return index


def area_chance(catalogue: Sequence[Pokemon], area: Area) -> int | None:
    """Run the probability engine for the Pokémon found in one area."""
    area_pokemon = [p for p in catalogue if matches_area(p, area.place, area.type, area.time)]
    filters = FilterState(location=area.place, time=area.time, type=area.type)
    return compute_route_probability(area_pokemon, filters).chance


def iter_areas(index: AreaIndex) -> list[Area]:
    """Every area in the index, in place display order."""
    areas: list[Area] = []
    for place in sort_locations(index):
        for location_type in TYPE_ORDER:
            for time in TIME_ORDER:
                if time in index[place].get(location_type, {}):
                    areas.append(Area(place, location_type, time))
    return areas


def fill_area_index(index: AreaIndex, catalogue: Sequence[Pokemon]) -> AreaIndex:
    """Compute the chance for every seeded area, updating the index in place."""
    for area in iter_areas(index):
        index[area.place][area.type][area.time] = area_chance(catalogue, area)
    return index


def update_area(index: AreaIndex, catalogue: Sequence[Pokemon], area: Area) -> None:
    """Recompute one area's chance in place."""
    times = index.get(area.place, {}).get(area.type)
    if times is None or area.time not in times:
        raise InvariantViolation(
            f"Area {area.place}/{area.type.value}/{area.time.value} not indexed"
        )
    times[area.time] = area_chance(catalogue, area)


def build_area_index(catalogue: Sequence[Pokemon]) -> AreaIndex:
    """
    Build the full area index for a catalogue.

    Areas with nothing left to catch keep a value of None.
    """
    index = fill_area_index(seed_area_index(catalogue), catalogue)

    logger.info(
        "area_index_built",
        extra={
            "places": len(index),
            "areas": len(iter_areas(index)),
        },
    )

    return index


def _best_time(
    times: dict[TimeOfDay, int | None], time: TimeOfDay | None
) -> tuple[TimeOfDay, int] | None:
    """Pick the time to report for a terrain: the requested one, or the minimum."""
    if time is not None:
        value = times.get(time)
        return (time, value) if value is not None else None

    best: tuple[TimeOfDay, int] | None = None
    for candidate in TIME_ORDER:
        value = times.get(candidate)
        if value is None:
            continue
        if best is None or value < best[1]:
            best = (candidate, value)
    return best


def recommend_route(index: AreaIndex, filters: FilterState) -> Area | None:
    """
    Recommend the area with the best odds of a new catch.

    The best area has the smallest N in "1 in N". With no time filter,
    each place/terrain is represented by its smaller value across times.
    Ties go to the first place in display order, then to Land over Water.

    Returns:
        The winning area, or None if every area is complete.
    """
    best: tuple[Area, int] | None = None

    for place in sort_locations(index):
        for location_type in TYPE_ORDER:
            times = index[place].get(location_type)
            if times is None:
                continue

            picked = _best_time(times, filters.time)
            if picked is None:
                continue

            time, value = picked
            if best is None or value < best[1]:
                best = (Area(place, location_type, time), value)

    if best is None:
        return None

    logger.debug("route_recommended", extra={"area": best[0], "chance": best[1]})
    return best[0]
