"""
Derived views produced by the engine.

These are transient: built from the catalogue on every recomputation and
never persisted. VariantGroup rows reference live Pokémon; the *View types
freeze caught flags at snapshot time for observers.
"""

from dataclasses import dataclass
from typing import NamedTuple

from dextracker.models.failure import InvariantViolation
from dextracker.models.pokemon import LocationType, Pokemon, Rarity, TimeOfDay, VariantType

# Fixed-width row: slot 0 is the base form, deeper slots its evolutions
EvolutionLine = tuple[Pokemon | None, ...]

# place -> terrain -> time -> "1 in N" chance (None while unset or complete)
AreaIndex = dict[str, dict[LocationType, dict[TimeOfDay, int | None]]]


class Area(NamedTuple):
    """An encounter context."""

    place: str
    type: LocationType
    time: TimeOfDay


@dataclass(frozen=True)
class VariantGroup:
    """All displayed evolution rows for one variant type."""

    type: VariantType
    lines: tuple[EvolutionLine, ...]


@dataclass(frozen=True, slots=True)
class RouteEstimate:
    """
    Encounter estimate for an area.

    Attributes:
        chance: N in "1 in N", or None once nothing is left to catch
        caught: Caught variants among the area's Pokémon
        total: Variant slots in the area (6 per Pokémon)
    """

    chance: int | None
    caught: int
    total: int

    @property
    def complete(self) -> bool:
        return self.chance is None


@dataclass(frozen=True, slots=True)
class Progress:
    """Catalogue-wide caught counter."""

    caught: int
    total: int


@dataclass(frozen=True, slots=True)
class CellView:
    """One rendered card: a Pokémon in a given variant."""

    pokemon_id: int
    name: str
    rarity: Rarity
    variant: VariantType
    caught: bool


@dataclass(frozen=True, slots=True)
class GroupView:
    """Immutable rendering of a VariantGroup."""

    type: VariantType
    rows: tuple[tuple[CellView | None, ...], ...]


def freeze_group(group: VariantGroup) -> GroupView:
    """Capture a VariantGroup's current caught flags."""
    rows = []
    for line in group.lines:
        cells: list[CellView | None] = []
        for pokemon in line:
            if pokemon is None:
                cells.append(None)
                continue
            variant = pokemon.get_variant(group.type)
            if variant is None:
                raise InvariantViolation(
                    f"{pokemon.name} has no {group.type.value} variant but is in its group"
                )
            cells.append(
                CellView(
                    pokemon_id=pokemon.id,
                    name=pokemon.name,
                    rarity=pokemon.rarity,
                    variant=group.type,
                    caught=variant.caught,
                )
            )
        rows.append(tuple(cells))
    return GroupView(type=group.type, rows=tuple(rows))
