"""
Location matching.

A Pokémon matches when at least one of its location records satisfies
every active field constraint at once (OR across records, AND across
fields). Unset fields are unconstrained, so relaxing a filter never
reduces the number of matches.
"""

from collections.abc import Sequence

from dextracker.models.filters import FilterState
from dextracker.models.pokemon import LocationRecord, LocationType, Pokemon, TimeOfDay


def location_matches(record: LocationRecord, filters: FilterState) -> bool:
    """Check a single location record against the active filters."""
    if filters.location and record.place != filters.location:
        return False
    if filters.time is not None and record.time != filters.time:
        return False
    return not (filters.type is not None and record.type != filters.type)


def matches(pokemon: Pokemon, filters: FilterState) -> bool:
    """Check if any of the Pokémon's location records satisfies the filters."""
    return any(location_matches(record, filters) for record in pokemon.locations)


def matches_area(pokemon: Pokemon, place: str, type: LocationType, time: TimeOfDay) -> bool:
    """Check if the Pokémon appears in exactly this place/terrain/time."""
    return any(
        record.place == place and record.type == type and record.time == time
        for record in pokemon.locations
    )


def select_base_forms(catalogue: Sequence[Pokemon], filters: FilterState) -> list[Pokemon]:
    """Base forms that match the filters, in catalogue order."""
    return [pokemon for pokemon in catalogue if pokemon.is_base_form and matches(pokemon, filters)]
