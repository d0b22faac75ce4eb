"""
Encounter probability engine.

Estimates the chance of the next encounter in an area being an uncaught
Pokémon-variant, expressed as "1 in N".

Model:
- Each Pokémon gets an encounter rarity. Common evolutions encounter as Rare.
- Each rarity has a probability mass. Rarer categories present in the area
  take their mass out of the Common pool.
- Common and Rare mass is split evenly across the area's members of that
  category.
- Within an encounter, each variant type has a fixed share.
- The route probability is the summed mass of every uncaught
  (Pokémon, variant) pair; the estimate is its reciprocal.

A route with nothing left to catch yields chance=None (complete), not an error.
"""

import logging
import math
from collections.abc import Sequence

from dextracker.config import VARIANT_SLOTS_PER_POKEMON
from dextracker.engine.matcher import matches_area
from dextracker.models.filters import FilterState
from dextracker.models.pokemon import Pokemon, Rarity, VariantType
from dextracker.models.projection import Progress, RouteEstimate

logger = logging.getLogger(__name__)

RARITY_PROBABILITIES: dict[Rarity, float] = {
    Rarity.COMMON: 1.0,
    Rarity.RARE: 0.005,
    Rarity.LEGENDARY: 0.001,
    Rarity.ULTRA_BEAST: 0.0001,
}

COMMON_VARIANT_MODIFIERS: dict[VariantType, float] = {
    VariantType.NORMAL: 0.92,
    VariantType.SHINY: 0.01,
    VariantType.DARK: 0.02,
    VariantType.MYSTIC: 0.02,
    VariantType.METALLIC: 0.02,
    VariantType.SHADOW: 0.01,
}

# Also applied to Legendary and Ultra Beast encounters
RARE_VARIANT_MODIFIERS: dict[VariantType, float] = {
    VariantType.NORMAL: 0.6,
    VariantType.SHINY: 0.05,
    VariantType.DARK: 0.1,
    VariantType.MYSTIC: 0.1,
    VariantType.METALLIC: 0.1,
    VariantType.SHADOW: 0.05,
}


def classify_encounter_rarity(pokemon: Pokemon) -> Rarity:
    """
    Rarity used for encounter odds.

    Common base forms stay Common; Common evolutions are encountered as
    Rare. Every other rarity is kept as declared.
    """
    if pokemon.rarity == Rarity.COMMON and not pokemon.is_base_form:
        return Rarity.RARE
    return pokemon.rarity


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def rarity_masses(area_pokemon: Sequence[Pokemon]) -> dict[Rarity, float]:
    """
    Probability mass per encounter rarity for an area.

    The Common mass loses the mass of every rarer category present.
    """
    present = {classify_encounter_rarity(p) for p in area_pokemon}
    masses = dict(RARITY_PROBABILITIES)

    common = RARITY_PROBABILITIES[Rarity.COMMON]
    for rarity in (Rarity.RARE, Rarity.LEGENDARY, Rarity.ULTRA_BEAST):
        if rarity in present:
            common -= RARITY_PROBABILITIES[rarity]
    masses[Rarity.COMMON] = common

    return masses


def pokemon_probability(
    pokemon: Pokemon,
    masses: dict[Rarity, float],
    counts: dict[Rarity, int],
) -> float:
    """Per-encounter probability of meeting this Pokémon."""
    rarity = classify_encounter_rarity(pokemon)
    probability = masses[rarity]

    # Only Common and Rare mass is shared across members; skip empty counts
    if rarity in (Rarity.COMMON, Rarity.RARE) and counts.get(rarity, 0) > 0:
        probability /= counts[rarity]

    return probability


def variant_modifiers(pokemon: Pokemon) -> dict[VariantType, float]:
    """Variant shares for this Pokémon's encounter rarity."""
    if classify_encounter_rarity(pokemon) == Rarity.COMMON:
        return COMMON_VARIANT_MODIFIERS
    return RARE_VARIANT_MODIFIERS


def completion(candidates: Sequence[Pokemon]) -> tuple[int, int]:
    """
    Caught and total variant slots among candidates.

    Totals count every variant type per Pokémon, obtainable or not.
    """
    total = len(candidates) * VARIANT_SLOTS_PER_POKEMON
    caught = sum(p.caught_count() for p in candidates)
    return caught, total


def compute_route_probability(
    candidates: Sequence[Pokemon], filters: FilterState
) -> RouteEstimate:
    """
    Estimate the "1 in N" chance of the next uncaught catch in an area.

    Args:
        candidates: Pokémon displayed for the area (typically the projector's
            candidates). Only those found in the exact area contribute
            to the odds; all of them count toward completion.
        filters: Active filters; location, time and type must all be set

    Returns:
        RouteEstimate with chance=None when nothing is left to catch.

    Raises:
        ValueError: If the filters do not define an area
    """
    if not filters.has_area():
        raise ValueError("Route probability needs location, time and type filters")

    assert filters.location is not None
    assert filters.time is not None
    assert filters.type is not None

    caught, total = completion(candidates)

    area_pokemon = [
        p for p in candidates if matches_area(p, filters.location, filters.type, filters.time)
    ]
    uncaught = [p for p in area_pokemon if p.has_uncaught_variant()]

    if not uncaught:
        return RouteEstimate(chance=None, caught=caught, total=total)

    masses = rarity_masses(area_pokemon)
    counts: dict[Rarity, int] = {}
    for pokemon in area_pokemon:
        rarity = classify_encounter_rarity(pokemon)
        counts[rarity] = counts.get(rarity, 0) + 1

    route_probability = 0.0
    for pokemon in uncaught:
        probability = pokemon_probability(pokemon, masses, counts)
        modifiers = variant_modifiers(pokemon)
        for variant in pokemon.variants:
            if not variant.caught:
                route_probability += probability * modifiers[variant.type]

    if route_probability <= 0:
        return RouteEstimate(chance=None, caught=caught, total=total)

    chance = round_half_away_from_zero(1 / route_probability)

    logger.debug(
        "route_probability_computed",
        extra={
            "location": filters.location,
            "time": filters.time.value,
            "type": filters.type.value,
            "area_pokemon": len(area_pokemon),
            "uncaught": len(uncaught),
            "chance": chance,
        },
    )

    return RouteEstimate(chance=chance, caught=caught, total=total)


def catalogue_progress(catalogue: Sequence[Pokemon]) -> Progress:
    """Caught variants over obtainable variants across the whole catalogue."""
    total = sum(len(p.variants) for p in catalogue)
    caught = sum(p.caught_count() for p in catalogue)
    return Progress(caught=caught, total=total)
