"""
Filtering, evolution-chain and encounter-probability engine.

All functions are pure over (catalogue, filters); callers own the state.
"""

from dextracker.engine.area_index import (
    build_area_index,
    list_locations,
    recommend_route,
    sort_locations,
    update_area,
)
from dextracker.engine.evolution import (
    build_display_list,
    build_evolution_line,
    build_evolution_rows,
    get_evolutions,
)
from dextracker.engine.matcher import matches, matches_area, select_base_forms
from dextracker.engine.probability import (
    catalogue_progress,
    classify_encounter_rarity,
    compute_route_probability,
)
from dextracker.engine.projector import build_candidates, project

__all__ = [
    "build_area_index",
    "build_candidates",
    "build_display_list",
    "build_evolution_line",
    "build_evolution_rows",
    "catalogue_progress",
    "classify_encounter_rarity",
    "compute_route_probability",
    "get_evolutions",
    "list_locations",
    "matches",
    "matches_area",
    "project",
    "recommend_route",
    "select_base_forms",
    "sort_locations",
    "update_area",
]
