"""
Catalogue JSON parsing.

The catalogue file is a list of Pokémon objects:

    {
        "id": 1,
        "name": "Bulbasaur",
        "rarity": "Common",
        "previousForms": [],
        "locations": [{"place": "Route 1", "type": "Land", "time": "Day"}],
        "variants": [{"type": "Normal", "caught": false}]
    }

Parsing validates the data-model invariants up front so the engine can
rely on them.
"""

from typing import Any

from pydantic import StrictBool, TypeAdapter

from dextracker.models.failure import CatalogueLoadError
from dextracker.models.pokemon import (
    LocationRecord,
    LocationType,
    Pokemon,
    Rarity,
    TimeOfDay,
    Variant,
    VariantType,
)

_caught_adapter = TypeAdapter(StrictBool)


def _require(entry: dict[str, Any], key: str, position: int) -> Any:
    if key not in entry:
        raise CatalogueLoadError(f"Entry {position} is missing '{key}'")
    return entry[key]


def parse_location(data: dict[str, Any]) -> LocationRecord:
    """Parse a location record."""
    return LocationRecord(
        place=str(data["place"]),
        type=LocationType(data["type"]),
        time=TimeOfDay(data["time"]),
    )


def parse_variant(data: dict[str, Any]) -> Variant:
    """
    Parse a variant; a missing caught flag means uncaught.

    Raises:
        ValidationError: If caught is present but not a JSON boolean
    """
    caught = _caught_adapter.validate_python(data.get("caught", False))
    return Variant(type=VariantType(data["type"]), caught=caught)


def parse_pokemon(data: dict[str, Any], position: int = 0) -> Pokemon:
    """
    Parse one catalogue entry.

    Raises:
        CatalogueLoadError: If a required key is missing or a value is invalid
    """
    if not isinstance(data, dict):
        raise CatalogueLoadError(f"Entry {position} is not an object")

    try:
        return Pokemon(
            id=int(_require(data, "id", position)),
            name=str(_require(data, "name", position)),
            rarity=Rarity(_require(data, "rarity", position)),
            previous_forms=[int(pid) for pid in data.get("previousForms", [])],
            locations=[parse_location(loc) for loc in data.get("locations", [])],
            variants=[parse_variant(var) for var in data.get("variants", [])],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogueLoadError(f"Entry {position} is invalid", detail=str(e)) from e


def validate_catalogue(catalogue: list[Pokemon]) -> None:
    """
    Check catalogue-wide invariants.

    - ids are unique
    - every previous form exists
    - no Pokémon lists itself as a previous form
    - at most one variant per type

    Raises:
        CatalogueLoadError: On the first violation found
    """
    ids: set[int] = set()
    for pokemon in catalogue:
        if pokemon.id in ids:
            raise CatalogueLoadError(f"Duplicate Pokémon id {pokemon.id}")
        ids.add(pokemon.id)

    for pokemon in catalogue:
        if pokemon.id in pokemon.previous_forms:
            raise CatalogueLoadError(f"{pokemon.name} lists itself as a previous form")
        missing = [pid for pid in pokemon.previous_forms if pid not in ids]
        if missing:
            raise CatalogueLoadError(f"{pokemon.name} references unknown previous forms {missing}")

        types = [variant.type for variant in pokemon.variants]
        if len(types) != len(set(types)):
            raise CatalogueLoadError(f"{pokemon.name} has duplicate variant types")


def parse_catalogue(data: Any) -> list[Pokemon]:
    """
    Parse and validate a decoded catalogue document.

    Raises:
        CatalogueLoadError: If the document is not a valid catalogue
    """
    if not isinstance(data, list):
        raise CatalogueLoadError("Catalogue must be a list of Pokémon")

    catalogue = [parse_pokemon(entry, position) for position, entry in enumerate(data)]
    validate_catalogue(catalogue)
    return catalogue


def pokemon_to_dict(pokemon: Pokemon) -> dict[str, Any]:
    """Serialize a Pokémon back to the catalogue JSON shape."""
    return {
        "id": pokemon.id,
        "name": pokemon.name,
        "rarity": pokemon.rarity.value,
        "previousForms": list(pokemon.previous_forms),
        "locations": [
            {"place": loc.place, "type": loc.type.value, "time": loc.time.value}
            for loc in pokemon.locations
        ],
        "variants": [
            {"type": variant.type.value, "caught": variant.caught} for variant in pokemon.variants
        ],
    }


def catalogue_to_list(catalogue: list[Pokemon]) -> list[dict[str, Any]]:
    """Serialize a whole catalogue."""
    return [pokemon_to_dict(pokemon) for pokemon in catalogue]
