"""
Evolution chain reconstruction.

Chains are rebuilt from the previous_forms relation: a Pokémon belongs to
a base form's chain if any of its previous forms is already in the chain.
Descendants are always returned in catalogue order.
"""

from collections.abc import Sequence

from dextracker.config import EVOLUTION_LINE_WIDTH, MAX_EVOLUTIONS_PER_LINE
from dextracker.models.pokemon import Pokemon
from dextracker.models.projection import EvolutionLine


def get_evolutions(base: Pokemon, catalogue: Sequence[Pokemon]) -> list[Pokemon]:
    """
    Find every descendant of a base form.

    Args:
        base: The base form
        catalogue: Pokémon to search (catalogue or an already-filtered list)

    Returns:
        Descendants in catalogue order, excluding the base form itself.
    """
    chain_ids = {base.id}
    found: set[int] = set()

    # previous_forms may list only the direct predecessor, so widen until stable
    changed = True
    while changed:
        changed = False
        for pokemon in catalogue:
            if pokemon.id in found or pokemon.id == base.id:
                continue
            if any(pokemon.evolves_from(pid) for pid in chain_ids):
                found.add(pokemon.id)
                chain_ids.add(pokemon.id)
                changed = True

    return [pokemon for pokemon in catalogue if pokemon.id in found]


def pad_line(stages: Sequence[Pokemon]) -> EvolutionLine:
    """Truncate to the line width and pad empty stages with None."""
    line: list[Pokemon | None] = list(stages[:EVOLUTION_LINE_WIDTH])
    while len(line) < EVOLUTION_LINE_WIDTH:
        line.append(None)
    return tuple(line)


def build_evolution_line(base: Pokemon, catalogue: Sequence[Pokemon]) -> EvolutionLine:
    """
    Build a fixed-width evolution row for a base form.

    Slot 0 is the base form. A base form with more than
    MAX_EVOLUTIONS_PER_LINE descendants keeps only the first ones in
    catalogue order.
    """
    evolutions = get_evolutions(base, catalogue)
    return pad_line([base, *evolutions[:MAX_EVOLUTIONS_PER_LINE]])


def build_display_list(
    base_forms: Sequence[Pokemon], catalogue: Sequence[Pokemon]
) -> list[Pokemon]:
    """
    Expand base forms into a flat display list.

    Each base form is followed by all of its descendants (no width limit).
    Descendants ride along whether or not they match the location filters.
    """
    display: list[Pokemon] = []
    for base in base_forms:
        display.append(base)
        display.extend(get_evolutions(base, catalogue))
    return display


def build_evolution_rows(pokemon: Sequence[Pokemon]) -> list[EvolutionLine]:
    """
    Group an already-filtered list into evolution rows.

    Rows start at base forms present in the list; their descendants are
    drawn from the same list. Evolutions whose base form is absent from
    the list do not get a row.
    """
    return [build_evolution_line(base, pokemon) for base in pokemon if base.is_base_form]
