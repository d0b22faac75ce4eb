"""
Display projection.

Turns the catalogue and the active filters into variant groups of
evolution rows, ready for rendering.

Pipeline:
1. Base forms matching the location filters, expanded with their evolutions
2. Variant filter (drop Pokémon lacking the selected variant)
3. One group per variant type in VARIANT_DISPLAY_ORDER, rarity-sorted
   (stable), grouped into evolution rows
4. Group omission: empty, fully caught while hiding caught, or not the
   selected variant

INVARIANTS:
- Pure: never mutates catalogue state
- Same catalogue + filters -> same output
"""

import logging
from collections.abc import Sequence

from dextracker.engine.evolution import build_display_list, build_evolution_rows
from dextracker.engine.matcher import select_base_forms
from dextracker.models.filters import FilterState
from dextracker.models.pokemon import RARITY_ORDER, VARIANT_DISPLAY_ORDER, Pokemon, VariantType
from dextracker.models.projection import VariantGroup

logger = logging.getLogger(__name__)


def _rarity_rank(pokemon: Pokemon) -> int:
    return RARITY_ORDER.index(pokemon.rarity)


def build_candidates(catalogue: Sequence[Pokemon], filters: FilterState) -> list[Pokemon]:
    """
    Pokémon shown for the active filters, before variant grouping.

    Returns an empty list when no filter is active.
    """
    if filters.is_empty():
        return []

    base_forms = select_base_forms(catalogue, filters)
    candidates = build_display_list(base_forms, catalogue)

    if filters.variant is not None:
        candidates = [p for p in candidates if p.has_variant(filters.variant)]

    return candidates


def sort_by_rarity(pokemon: Sequence[Pokemon]) -> list[Pokemon]:
    """Stable sort by RARITY_ORDER; ties keep their relative order."""
    return sorted(pokemon, key=_rarity_rank)


def _all_caught(pokemon: Sequence[Pokemon], variant_type: VariantType) -> bool:
    for entry in pokemon:
        variant = entry.get_variant(variant_type)
        if variant is None or not variant.caught:
            return False
    return True


def group_by_variant(
    candidates: Sequence[Pokemon],
    filters: FilterState,
    hide_caught: bool = False,
) -> list[VariantGroup]:
    """
    Build one VariantGroup per variant type, skipping omitted groups.

    Args:
        candidates: Output of build_candidates
        filters: Active filters (only the variant field is consulted)
        hide_caught: Omit groups where every Pokémon has the variant caught

    Returns:
        Groups in VARIANT_DISPLAY_ORDER.
    """
    groups: list[VariantGroup] = []

    for variant_type in VARIANT_DISPLAY_ORDER:
        if filters.variant is not None and filters.variant != variant_type:
            continue

        members = sort_by_rarity([p for p in candidates if p.has_variant(variant_type)])
        if not members:
            continue

        if hide_caught and _all_caught(members, variant_type):
            continue

        groups.append(VariantGroup(type=variant_type, lines=tuple(build_evolution_rows(members))))

    return groups


def project(
    catalogue: Sequence[Pokemon],
    filters: FilterState,
    hide_caught: bool = False,
) -> list[VariantGroup]:
    """
    Project the catalogue into ordered variant groups.

    Args:
        catalogue: Full catalogue
        filters: Active filters
        hide_caught: "Hide fully-caught" display preference

    Returns:
        Variant groups in fixed display order; empty when no filter is active.
    """
    candidates = build_candidates(catalogue, filters)
    groups = group_by_variant(candidates, filters, hide_caught)

    logger.debug(
        "projection_built",
        extra={
            "candidates": len(candidates),
            "groups": [group.type.value for group in groups],
            "hide_caught": hide_caught,
        },
    )

    return groups
